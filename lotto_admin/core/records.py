"""
Plain read-only records the reporting core works on.

They are filled by a repository (SQLAlchemy in production, in-memory in
tests) so the core never touches an ORM session.
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Tuple, Union

CLAIMED_STATUS = "claimed"


@dataclass(frozen=True)
class AgentRecord:
    id: int
    username: str
    full_name: Optional[str] = None
    role: str = "agent"

    @property
    def display_name(self) -> str:
        return self.full_name or self.username or "Unknown"


@dataclass(frozen=True)
class BetRecord:
    id: int
    ticket_id: int
    bet_combination: Optional[str]
    bet_type: Optional[str]
    bet_amount: Optional[Decimal]


@dataclass(frozen=True)
class TicketRecord:
    id: int
    ticket_number: str
    user_id: Optional[int]
    draw_id: Optional[int]
    total_amount: Decimal
    status: str
    created_at: Optional[datetime]
    bets: Tuple[BetRecord, ...] = ()
    agent: Optional[AgentRecord] = None

    @property
    def agent_name(self) -> str:
        return self.agent.display_name if self.agent else "Unknown"

    @property
    def is_claimed(self) -> bool:
        return (self.status or "").lower() == CLAIMED_STATUS


# --- Draw state ---
@dataclass(frozen=True)
class SettledDraw:
    winning_numbers: Tuple[str, ...]


@dataclass(frozen=True)
class PendingDraw:
    pass


DrawState = Union[SettledDraw, PendingDraw]


@dataclass(frozen=True)
class DrawRecord:
    id: int
    draw_date: date
    draw_time: Optional[str] = None
    status: Optional[str] = None
    winning_numbers: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def state(self) -> DrawState:
        # No posted result means the draw is not settled yet
        if self.winning_numbers:
            return SettledDraw(winning_numbers=tuple(self.winning_numbers))
        return PendingDraw()
