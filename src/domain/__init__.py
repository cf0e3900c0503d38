"""Domain layer (pure logic).

- Stage plans, scoring and reward rules for a live performance.
- Avoid I/O: no DB sessions, no HTTP/FastAPI, no sleeping.
- Randomness is never drawn here; the simulator owns the random source.
"""
