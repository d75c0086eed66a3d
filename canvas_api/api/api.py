# canvas_api/api/api.py
from fastapi import APIRouter

from canvas_api.api.endpoints.teams import router as teams_router

api_router = APIRouter()

api_router.include_router(teams_router, prefix="/teams", tags=["teams"])
