"""Read access to tickets, draws, agents and prize rates for the reports."""
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from sqlalchemy.orm import Session, selectinload

from lotto_admin.core.records import AgentRecord, BetRecord, DrawRecord, TicketRecord
from lotto_admin.models.lotto import Draw, PrizeConfiguration, Ticket
from lotto_admin.models.user import User, UserRole


class ReportRepository:
    """
    Data source the report service reads from.

    Date filters on tickets are UTC datetimes (inclusive); date filters on
    draws are calendar dates (inclusive).
    """

    def list_tickets(
        self,
        created_from: Optional[datetime] = None,
        created_to: Optional[datetime] = None,
        agent_id: Optional[int] = None,
        draw_id: Optional[int] = None,
        draw_ids: Optional[Iterable[int]] = None,
    ) -> List[TicketRecord]:
        raise NotImplementedError

    def list_draws(
        self,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        draw_id: Optional[int] = None,
        status: Optional[str] = None,
        draw_ids: Optional[Iterable[int]] = None,
    ) -> List[DrawRecord]:
        raise NotImplementedError

    def list_agents(self) -> List[AgentRecord]:
        raise NotImplementedError

    def get_prize_rates(self) -> Dict[str, Decimal]:
        """Active multipliers keyed by prize-configuration bet type."""
        raise NotImplementedError

    def reset(self) -> None:
        """Discard state left behind by a failed read so later reads can run."""


# --- ORM -> record mapping ---
def to_agent_record(user: User) -> AgentRecord:
    role = user.role.value if isinstance(user.role, UserRole) else str(user.role)
    return AgentRecord(id=user.id, username=user.username, full_name=user.full_name, role=role)


def to_ticket_record(ticket: Ticket) -> TicketRecord:
    return TicketRecord(
        id=ticket.id,
        ticket_number=ticket.ticket_number,
        user_id=ticket.user_id,
        draw_id=ticket.draw_id,
        total_amount=ticket.total_amount,
        status=ticket.status,
        created_at=ticket.created_at,
        bets=tuple(
            BetRecord(
                id=bet.id,
                ticket_id=bet.ticket_id,
                bet_combination=bet.bet_combination,
                bet_type=bet.bet_type,
                bet_amount=bet.bet_amount,
            )
            for bet in ticket.bets
        ),
        agent=to_agent_record(ticket.user) if ticket.user else None,
    )


def to_draw_record(draw: Draw) -> DrawRecord:
    return DrawRecord(
        id=draw.id,
        draw_date=draw.draw_date,
        draw_time=draw.draw_time,
        status=draw.status,
        winning_numbers=tuple(r.winning_number for r in draw.results if r.winning_number),
    )


class SqlReportRepository(ReportRepository):
    def __init__(self, db: Session):
        self.db = db

    def list_tickets(
        self,
        created_from: Optional[datetime] = None,
        created_to: Optional[datetime] = None,
        agent_id: Optional[int] = None,
        draw_id: Optional[int] = None,
        draw_ids: Optional[Iterable[int]] = None,
    ) -> List[TicketRecord]:
        query = self.db.query(Ticket).options(
            selectinload(Ticket.bets),
            selectinload(Ticket.user),
        )

        if created_from is not None:
            query = query.filter(Ticket.created_at >= created_from)
        if created_to is not None:
            query = query.filter(Ticket.created_at <= created_to)
        if agent_id is not None:
            query = query.filter(Ticket.user_id == agent_id)
        if draw_id is not None:
            query = query.filter(Ticket.draw_id == draw_id)
        if draw_ids is not None:
            draw_ids = list(draw_ids)
            if not draw_ids:
                return []
            query = query.filter(Ticket.draw_id.in_(draw_ids))

        tickets = query.order_by(Ticket.created_at.desc(), Ticket.id.desc()).all()
        return [to_ticket_record(t) for t in tickets]

    def list_draws(
        self,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        draw_id: Optional[int] = None,
        status: Optional[str] = None,
        draw_ids: Optional[Iterable[int]] = None,
    ) -> List[DrawRecord]:
        query = self.db.query(Draw).options(selectinload(Draw.results))

        if date_from is not None:
            query = query.filter(Draw.draw_date >= date_from)
        if date_to is not None:
            query = query.filter(Draw.draw_date <= date_to)
        if draw_id is not None:
            query = query.filter(Draw.id == draw_id)
        if status:
            query = query.filter(Draw.status == status)
        if draw_ids is not None:
            draw_ids = list(draw_ids)
            if not draw_ids:
                return []
            query = query.filter(Draw.id.in_(draw_ids))

        draws = query.order_by(Draw.draw_date.desc(), Draw.id.desc()).all()
        return [to_draw_record(d) for d in draws]

    def list_agents(self) -> List[AgentRecord]:
        agents = self.db.query(User).filter(User.role == UserRole.agent).order_by(User.id).all()
        return [to_agent_record(u) for u in agents]

    def get_prize_rates(self) -> Dict[str, Decimal]:
        configs = self.db.query(PrizeConfiguration).filter(PrizeConfiguration.is_active.is_(True)).all()
        return {c.bet_type: c.multiplier for c in configs}

    def reset(self) -> None:
        # Postgres refuses every statement after an error until the transaction is rolled back
        self.db.rollback()
