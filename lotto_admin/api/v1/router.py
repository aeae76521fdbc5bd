from fastapi import APIRouter
from lotto_admin.api.v1.endpoints import winning_reports, prize_configuration

api_router = APIRouter()

api_router.include_router(winning_reports.router, prefix="/winning-reports", tags=["winning-reports"])
api_router.include_router(prize_configuration.router, prefix="/prize-configuration", tags=["prize-configuration"])
