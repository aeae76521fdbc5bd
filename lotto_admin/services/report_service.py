"""
Fetch-then-compute orchestration for the winning reports.

Each logical data section (tickets, draws, agents, prize rates) is fetched
separately. A failing section is logged and degraded to an empty result so
the rest of the report can still be produced.
"""
import logging
from datetime import date
from typing import Callable, Dict, Iterable, List, Optional, TypeVar

from lotto_admin.core.config import (
    Settings,
    get_local_today,
    local_day_bounds,
    settings as default_settings,
    trailing_window,
)
from lotto_admin.core.records import DrawRecord, TicketRecord
from lotto_admin.core.report_builder import (
    build_agent_summary,
    build_daily_summary,
    build_draw_summary,
    build_period,
    build_summary_report,
    group_tickets_by_draw,
)
from lotto_admin.core.reward_calculator import PrizeCalculator, build_rate_table
from lotto_admin.repositories.report_repository import ReportRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")

ALL_STATUSES = {"", "all"}


def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None


class ReportService:
    def __init__(
        self,
        repository: ReportRepository,
        settings: Settings = default_settings,
        today_provider: Callable[[], date] = get_local_today,
    ):
        self.repository = repository
        self.settings = settings
        self.today_provider = today_provider

    # ==================== Helpers ====================
    def _fetch(self, section: str, fetch: Callable[[], T], fallback: T) -> T:
        try:
            return fetch()
        except Exception:
            logger.warning("Could not load %s, continuing without it", section, exc_info=True)
            self.repository.reset()
            return fallback

    def prize_calculator(self) -> PrizeCalculator:
        overrides = self._fetch("prize configuration", self.repository.get_prize_rates, {})
        return PrizeCalculator(build_rate_table(self.settings.PRIZE_RATES, overrides))

    def _draws_by_id(self, tickets: Iterable[TicketRecord]) -> Dict[int, DrawRecord]:
        draw_ids = sorted({t.draw_id for t in tickets if t.draw_id is not None})
        if not draw_ids:
            return {}
        draws = self._fetch("draws", lambda: self.repository.list_draws(draw_ids=draw_ids), [])
        return {d.id: d for d in draws}

    def _draw_tickets(self, draws: List[DrawRecord], agent_id: Optional[int] = None) -> Dict[int, List[TicketRecord]]:
        if not draws:
            return {}
        draw_ids = [d.id for d in draws]
        tickets = self._fetch(
            "draw tickets",
            lambda: self.repository.list_tickets(draw_ids=draw_ids, agent_id=agent_id),
            [],
        )
        return group_tickets_by_draw(tickets)

    # ==================== Reports ====================
    def summary_report(
        self,
        start: Optional[date] = None,
        end: Optional[date] = None,
        agent_id: Optional[int] = None,
        draw_id: Optional[int] = None,
    ) -> dict:
        calculator = self.prize_calculator()
        created_from, created_to = local_day_bounds(start, end)

        tickets = self._fetch(
            "tickets",
            lambda: self.repository.list_tickets(
                created_from=created_from, created_to=created_to,
                agent_id=agent_id, draw_id=draw_id,
            ),
            [],
        )
        draws = self._fetch(
            "draws",
            lambda: self.repository.list_draws(date_from=start, date_to=end, draw_id=draw_id),
            [],
        )
        draw_tickets = self._draw_tickets(draws, agent_id=agent_id)

        period = build_period(
            _iso(start), _iso(end),
            agentFilter=agent_id if agent_id is not None else "All agents",
            drawFilter=draw_id if draw_id is not None else "All draws",
        )
        return build_summary_report(tickets, draws, draw_tickets, calculator, period)

    def draw_summary(
        self,
        start: Optional[date] = None,
        end: Optional[date] = None,
        status: Optional[str] = None,
    ) -> dict:
        if status is None:
            status = self.settings.DRAW_SUMMARY_DEFAULT_STATUS
        status_filter = None if status.strip().lower() in ALL_STATUSES else status

        calculator = self.prize_calculator()
        draws = self._fetch(
            "draws",
            lambda: self.repository.list_draws(date_from=start, date_to=end, status=status_filter),
            [],
        )
        draw_tickets = self._draw_tickets(draws)

        period = build_period(_iso(start), _iso(end), status=status_filter or "all")
        return build_draw_summary(draws, draw_tickets, calculator, period)

    def agent_summary(self, start: Optional[date] = None, end: Optional[date] = None) -> dict:
        calculator = self.prize_calculator()
        agents = self._fetch("agents", self.repository.list_agents, [])
        if not agents:
            return build_agent_summary([], [], {}, calculator)

        created_from, created_to = local_day_bounds(start, end)
        tickets = self._fetch(
            "agent tickets",
            lambda: self.repository.list_tickets(created_from=created_from, created_to=created_to),
            [],
        )
        return build_agent_summary(agents, tickets, self._draws_by_id(tickets), calculator)

    def daily_summary(self, days: Optional[int] = None) -> dict:
        if days is None:
            days = self.settings.DAILY_SUMMARY_DEFAULT_DAYS

        calculator = self.prize_calculator()
        first_day, today = trailing_window(days, self.today_provider())
        created_from, _ = local_day_bounds(first_day, None)

        tickets = self._fetch(
            "daily tickets",
            lambda: self.repository.list_tickets(created_from=created_from),
            [],
        )
        return build_daily_summary(tickets, self._draws_by_id(tickets), calculator, days, today)
