from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query

from lotto_admin.api import deps
from lotto_admin.api.responses import server_error
from lotto_admin.core.config import settings
from lotto_admin.services.report_service import ReportService

router = APIRouter()


@router.get("/summary")
def get_winning_summary(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    agent_id: Optional[int] = Query(None, alias="agentId"),
    draw_id: Optional[int] = Query(None, alias="drawId"),
    service: ReportService = Depends(deps.get_report_service),
):
    """Expected vs. claimed winnings from actual draw results, with per-draw and per-agent breakdown."""
    s_date = deps.parse_date_param(start_date, "startDate")
    e_date = deps.parse_date_param(end_date, "endDate")

    try:
        report = service.summary_report(s_date, e_date, agent_id=agent_id, draw_id=draw_id)
    except Exception as exc:
        return server_error("Error generating winning report", exc)

    return {"success": True, "report": report}


@router.get("/draw-summary")
def get_draw_summary(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    status: str = Query(settings.DRAW_SUMMARY_DEFAULT_STATUS),
    service: ReportService = Depends(deps.get_report_service),
):
    """Expected payout per draw, for planning how much cash to prepare. status=all disables the filter."""
    s_date = deps.parse_date_param(start_date, "startDate")
    e_date = deps.parse_date_param(end_date, "endDate")

    try:
        result = service.draw_summary(s_date, e_date, status=status)
    except Exception as exc:
        return server_error("Error generating draw summary", exc)

    return {"success": True, **result}


@router.get("/agent-summary")
def get_agent_summary(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    service: ReportService = Depends(deps.get_report_service),
):
    s_date = deps.parse_date_param(start_date, "startDate")
    e_date = deps.parse_date_param(end_date, "endDate")

    try:
        result = service.agent_summary(s_date, e_date)
    except Exception as exc:
        return server_error("Error generating agent summary", exc)

    return {"success": True, **result}


@router.get("/daily-summary")
def get_daily_summary(
    days: int = Query(settings.DAILY_SUMMARY_DEFAULT_DAYS, ge=1),
    service: ReportService = Depends(deps.get_report_service),
):
    if days > settings.DAILY_SUMMARY_MAX_DAYS:
        raise HTTPException(status_code=400, detail=f"days must be at most {settings.DAILY_SUMMARY_MAX_DAYS}")

    try:
        result = service.daily_summary(days)
    except Exception as exc:
        return server_error("Error generating daily summary", exc)

    return {"success": True, **result}
