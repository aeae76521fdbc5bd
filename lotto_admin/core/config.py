from decimal import Decimal
from datetime import datetime, time, timedelta, date
from typing import Dict, List, Optional, Tuple

import pytz
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    PROJECT_NAME: str = "Lotto Admin Reporting API"
    API_V1_PREFIX: str = "/api/v1"

    DATABASE_URL: str = "sqlite:///./lotto_admin.db"

    # Draws, tickets and daily buckets are all reckoned in local business time
    TIMEZONE: str = "Asia/Manila"

    # Default per-peso multipliers, overridden by active prize_configurations rows
    PRIZE_RATES: Dict[str, Decimal] = {
        "straight": Decimal("4500"),
        "rambolito": Decimal("750"),
    }

    DAILY_SUMMARY_DEFAULT_DAYS: int = 7
    DAILY_SUMMARY_MAX_DAYS: int = 366
    DRAW_SUMMARY_DEFAULT_STATUS: str = "completed"

    # Raw exception text in 500 responses is only shown when enabled
    EXPOSE_ERROR_DETAILS: bool = False

    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    class Config:
        env_file = ".env"


settings = Settings()


def get_timezone():
    return pytz.timezone(settings.TIMEZONE)


def get_local_now() -> datetime:
    """Current time in the business timezone, regardless of where the server runs."""
    return datetime.now(get_timezone())


def get_local_today() -> date:
    return get_local_now().date()


def to_local_date(value: datetime) -> date:
    """
    Calendar date of a timestamp in the business timezone.

    Naive datetimes are treated as UTC (that is how they come back from
    SQLite and from timestamp columns without a zone).
    """
    if value.tzinfo is None:
        value = pytz.utc.localize(value)
    return value.astimezone(get_timezone()).date()


def local_day_bounds(
    start: Optional[date], end: Optional[date]
) -> Tuple[Optional[datetime], Optional[datetime]]:
    """
    Convert an inclusive local date range to UTC datetimes.

    start -> 00:00:00 local of that day, end -> 23:59:59.999999 local of that day.
    """
    tz = get_timezone()
    start_utc = None
    end_utc = None
    if start is not None:
        start_utc = tz.localize(datetime.combine(start, time.min)).astimezone(pytz.utc)
    if end is not None:
        end_utc = tz.localize(datetime.combine(end, time.max)).astimezone(pytz.utc)
    return start_utc, end_utc


def trailing_window(days: int, today: Optional[date] = None) -> Tuple[date, date]:
    """First and last calendar day of a window of `days` days ending today."""
    if today is None:
        today = get_local_today()
    return today - timedelta(days=days - 1), today
