"""Stage and show-type rules that are independent from HTTP and DB.

Rule of thumb:
- OK: lookup tables, pure transformations.
- Not OK: touching DB sessions, FastAPI, sleeping, drawing random numbers.
"""

from src.models.dc_models import (
    ShowTypeModel,
    ShowTypeModifierModel,
    StageDescriptorModel,
    StageRangeModel,
)

DEFAULT_SHOW_TYPE = ShowTypeModel.standard

STAGE_PRESETS = {
    ShowTypeModel.standard: (
        StageDescriptorModel(name="Sound Check", description="Setting up equipment and checking audio", duration=3),
        StageDescriptorModel(name="Opening", description="First impression and crowd warm-up", duration=4),
        StageDescriptorModel(name="Main Set", description="Core performance with main songs", duration=8),
        StageDescriptorModel(name="Encore", description="Final impression and crowd send-off", duration=3),
    ),
    ShowTypeModel.acoustic: (
        StageDescriptorModel(name="Tuning", description="Quiet setup and tuning in front of the room", duration=2),
        StageDescriptorModel(name="Intimate Opening", description="Drawing the audience in close", duration=4),
        StageDescriptorModel(name="Acoustic Set", description="Stripped-back versions of the songs", duration=9),
        StageDescriptorModel(name="Closing Song", description="One last quiet moment with the crowd", duration=3),
    ),
}

STAGE_RANGES = {
    ShowTypeModel.standard: StageRangeModel(
        base_skill=(40, 70),
        crowd_bonus=(0, 22),
        stage_presence_roll=(25, 45),
    ),
    ShowTypeModel.acoustic: StageRangeModel(
        base_skill=(45, 70),
        crowd_bonus=(5, 18),
        stage_presence_roll=(18, 32),
    ),
}

SHOW_TYPE_MODIFIERS = {
    ShowTypeModel.standard: ShowTypeModifierModel(payment=1.0, fan_gain=1.0, experience=1.0, attendance=1.0),
    ShowTypeModel.acoustic: ShowTypeModifierModel(payment=1.0, fan_gain=1.3, experience=1.15, attendance=0.8),
}


def normalize_show_type(show_type: str | ShowTypeModel | None) -> ShowTypeModel:
    """Map any stored show type onto a known one; unknown values become standard."""
    try:
        return ShowTypeModel(show_type)
    except ValueError:
        return DEFAULT_SHOW_TYPE


def plan_stages(show_type: str | ShowTypeModel | None) -> list[StageDescriptorModel]:
    """Return the ordered stage plan for a show type."""
    return list(STAGE_PRESETS[normalize_show_type(show_type)])


def stage_ranges(show_type: str | ShowTypeModel | None) -> StageRangeModel:
    return STAGE_RANGES[normalize_show_type(show_type)]


def show_type_modifiers(show_type: str | ShowTypeModel | None) -> ShowTypeModifierModel:
    return SHOW_TYPE_MODIFIERS[normalize_show_type(show_type)]
