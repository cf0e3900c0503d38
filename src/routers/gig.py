import logging
from functools import lru_cache
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from src.domain.stage_rules import plan_stages
from src.errors import GigLoadError, GigStateError
from src.models.dc_models import (
    PerformanceResultModel,
    PerformRequestModel,
    StageDescriptorModel,
)
from src.services.gig_db import build_repositories
from src.services.performance import PerformanceService
from src.services.result_committer import ResultCommitter

gig_router = APIRouter()


@lru_cache
def get_result_committer() -> ResultCommitter:
    repositories = build_repositories()
    return ResultCommitter(
        repositories.gigs,
        repositories.profiles,
        repositories.activity,
        repositories.settlements,
    )


def get_performance_service() -> PerformanceService:
    committer = get_result_committer()
    return PerformanceService(committer.gigs, committer.profiles, committer)


class StageAPI:
    @staticmethod
    @gig_router.get("/stages/{show_type}", response_model=List[StageDescriptorModel])
    async def get_stages_for_show_type(show_type: str):
        return plan_stages(show_type)

    @staticmethod
    @gig_router.get("/gigs/{gig_id}/stages", response_model=List[StageDescriptorModel])
    async def get_gig_stages(gig_id: UUID, service: PerformanceService = Depends(get_performance_service)):
        try:
            return await service.stage_plan(gig_id)
        except GigLoadError as e:
            logging.warning(f"Stage plan unavailable: {e}")
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


class PerformAPI:
    @staticmethod
    @gig_router.post("/gigs/{gig_id}/perform", response_model=PerformanceResultModel)
    async def perform_gig(
        gig_id: UUID,
        request: PerformRequestModel,
        service: PerformanceService = Depends(get_performance_service),
    ):
        try:
            return await service.perform_gig(gig_id, request.profile_id)
        except GigLoadError as e:
            logging.warning(f"Cannot perform gig: {e}")
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
        except GigStateError as e:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
