# lotto_admin/api/deps.py
from datetime import datetime, date
from typing import Optional

from fastapi import Depends, HTTPException
from sqlalchemy.orm import Session

from lotto_admin.db.session import get_db
from lotto_admin.repositories.prize_config_repository import PrizeConfigRepository
from lotto_admin.repositories.report_repository import ReportRepository, SqlReportRepository
from lotto_admin.services.report_service import ReportService


def get_report_repository(db: Session = Depends(get_db)) -> ReportRepository:
    return SqlReportRepository(db)


def get_report_service(repository: ReportRepository = Depends(get_report_repository)) -> ReportService:
    return ReportService(repository)


def get_prize_config_repository(db: Session = Depends(get_db)) -> PrizeConfigRepository:
    return PrizeConfigRepository(db)


def parse_date_param(value: Optional[str], name: str) -> Optional[date]:
    """YYYY-MM-DD query param -> date, 400 on anything else."""
    if not value:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid date format for {name} (expected YYYY-MM-DD)")
