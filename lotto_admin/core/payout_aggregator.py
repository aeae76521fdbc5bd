"""
Per-draw payout aggregation.

Every bet of every ticket in a settled draw is checked against the draw's
winning numbers; winning bets are priced and folded into expected/claimed
totals. Draws without posted results are reported as pending with zero
payout, never estimated.
"""
import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

from lotto_admin.core.game_logic import evaluate_bet
from lotto_admin.core.records import DrawRecord, SettledDraw, TicketRecord
from lotto_admin.core.reward_calculator import MalformedBetError, PrizeCalculator, to_decimal

logger = logging.getLogger(__name__)

RESULTS_SETTLED = "settled"
RESULTS_PENDING = "pending_results"


@dataclass(frozen=True)
class WinningBetRecord:
    ticket_id: int
    ticket_number: str
    agent_id: Optional[int]
    agent_name: str
    bet_combination: str
    bet_type: Optional[str]
    bet_amount: Decimal
    win_type: str
    prize_amount: Decimal
    status: str
    draw_id: Optional[int]
    draw_date: Optional[date]
    winning_number: str

    @property
    def is_claimed(self) -> bool:
        return (self.status or "").lower() == "claimed"

    def to_dict(self) -> dict:
        return {
            "ticketId": self.ticket_id,
            "ticketNumber": self.ticket_number,
            "agentId": self.agent_id,
            "agentName": self.agent_name,
            "betCombination": self.bet_combination,
            "betType": self.bet_type,
            "betAmount": self.bet_amount,
            "winType": self.win_type,
            "prizeAmount": self.prize_amount,
            "status": self.status,
            "drawId": self.draw_id,
            "drawDate": self.draw_date,
            "winningNumber": self.winning_number,
        }


@dataclass
class TicketOutcome:
    ticket: TicketRecord
    winning_bets: List[WinningBetRecord] = field(default_factory=list)
    expected_payout: Decimal = Decimal("0")
    claimed_payout: Decimal = Decimal("0")

    @property
    def is_winning(self) -> bool:
        return bool(self.winning_bets)

    @property
    def is_claimed_win(self) -> bool:
        return self.is_winning and self.ticket.is_claimed


@dataclass
class DrawSummary:
    draw_id: int
    draw_date: date
    draw_time: Optional[str]
    status: Optional[str]
    results_status: str
    winning_numbers: Tuple[str, ...]
    expected_payout: Decimal = Decimal("0")
    claimed_payout: Decimal = Decimal("0")
    winning_tickets_count: int = 0
    claimed_tickets_count: int = 0
    total_tickets: int = 0
    gross_sales: Decimal = Decimal("0")
    winning_tickets: List[WinningBetRecord] = field(default_factory=list)

    @property
    def pending_payout(self) -> Decimal:
        return self.expected_payout - self.claimed_payout

    @property
    def pending_tickets_count(self) -> int:
        return self.winning_tickets_count - self.claimed_tickets_count

    @property
    def is_settled(self) -> bool:
        return self.results_status == RESULTS_SETTLED

    def to_dict(self, include_tickets: bool = True) -> dict:
        data = {
            "drawId": self.draw_id,
            "drawDate": self.draw_date,
            "drawTime": self.draw_time or "00:00",
            "status": self.status,
            "resultsStatus": self.results_status,
            "winningNumbers": list(self.winning_numbers),
            "expectedPayout": self.expected_payout,
            "claimedPayout": self.claimed_payout,
            "pendingPayout": self.pending_payout,
            "winningTicketsCount": self.winning_tickets_count,
            "claimedTicketsCount": self.claimed_tickets_count,
            "pendingTicketsCount": self.pending_tickets_count,
            "totalTickets": self.total_tickets,
            "grossSales": self.gross_sales,
        }
        if include_tickets:
            data["winningTickets"] = [w.to_dict() for w in self.winning_tickets]
        return data


def evaluate_ticket(
    ticket: TicketRecord,
    draw: Optional[DrawRecord],
    calculator: PrizeCalculator,
) -> TicketOutcome:
    """
    Price every winning bet of one ticket.

    Tickets whose draw is missing or unsettled come back with no wins.
    Bets that cannot be evaluated are logged and skipped.
    """
    outcome = TicketOutcome(ticket=ticket)
    if draw is None:
        return outcome

    state = draw.state
    if not isinstance(state, SettledDraw):
        return outcome

    for bet in ticket.bets:
        try:
            if not bet.bet_combination:
                raise MalformedBetError("Bet has no combination")
            result = evaluate_bet(bet.bet_combination, bet.bet_type, state.winning_numbers)
            if not result.is_winning:
                continue
            stake = to_decimal(bet.bet_amount)
            prize = calculator.calculate(result.win_type, stake)
        except MalformedBetError as exc:
            logger.warning(
                "Skipping bet %s on ticket %s (draw %s): %s",
                bet.id, ticket.ticket_number, draw.id, exc,
            )
            continue

        outcome.winning_bets.append(
            WinningBetRecord(
                ticket_id=ticket.id,
                ticket_number=ticket.ticket_number,
                agent_id=ticket.user_id,
                agent_name=ticket.agent_name,
                bet_combination=bet.bet_combination,
                bet_type=bet.bet_type,
                bet_amount=stake,
                win_type=result.win_type.value,
                prize_amount=prize,
                status=ticket.status,
                draw_id=draw.id,
                draw_date=draw.draw_date,
                winning_number=result.matched_number,
            )
        )
        outcome.expected_payout += prize
        if ticket.is_claimed:
            outcome.claimed_payout += prize

    return outcome


def aggregate_draw(
    draw: DrawRecord,
    tickets: Iterable[TicketRecord],
    calculator: PrizeCalculator,
) -> DrawSummary:
    tickets = list(tickets)
    state = draw.state
    settled = isinstance(state, SettledDraw)

    summary = DrawSummary(
        draw_id=draw.id,
        draw_date=draw.draw_date,
        draw_time=draw.draw_time,
        status=draw.status,
        results_status=RESULTS_SETTLED if settled else RESULTS_PENDING,
        winning_numbers=state.winning_numbers if settled else (),
        total_tickets=len(tickets),
    )

    for ticket in tickets:
        try:
            summary.gross_sales += to_decimal(ticket.total_amount)
        except MalformedBetError as exc:
            logger.warning("Ticket %s has no usable total: %s", ticket.ticket_number, exc)

    if not settled:
        return summary

    for ticket in tickets:
        outcome = evaluate_ticket(ticket, draw, calculator)
        if not outcome.is_winning:
            continue
        summary.winning_tickets.extend(outcome.winning_bets)
        summary.expected_payout += outcome.expected_payout
        summary.claimed_payout += outcome.claimed_payout
        summary.winning_tickets_count += 1
        if outcome.is_claimed_win:
            summary.claimed_tickets_count += 1

    return summary
