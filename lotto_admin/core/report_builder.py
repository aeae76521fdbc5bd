"""
Rollup reports over tickets, bets and draw results.

Three views share the same primitives (evaluate_ticket / aggregate_draw):
by draw, by agent and by calendar day. Each returns row-level data plus
totals and derived ratio metrics, already shaped for the admin UI.

Ratios are percentages and are 0 whenever the denominator is 0.
Net sales only deduct claimed winnings (current cash position); pending
claims are reported separately.
"""
import logging
from collections import OrderedDict
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from lotto_admin.core.config import to_local_date
from lotto_admin.core.payout_aggregator import DrawSummary, aggregate_draw, evaluate_ticket
from lotto_admin.core.records import AgentRecord, DrawRecord, TicketRecord
from lotto_admin.core.reward_calculator import MalformedBetError, PrizeCalculator, to_decimal

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")
ALL_TIME = "All time"


def safe_percent(numerator, denominator) -> Decimal:
    numerator = Decimal(numerator)
    denominator = Decimal(denominator)
    if denominator == 0:
        return ZERO
    return (numerator / denominator * HUNDRED).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def safe_ratio(numerator, denominator) -> Decimal:
    numerator = Decimal(numerator)
    denominator = Decimal(denominator)
    if denominator == 0:
        return ZERO
    return (numerator / denominator).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def ticket_amount(ticket: TicketRecord) -> Decimal:
    try:
        return to_decimal(ticket.total_amount)
    except MalformedBetError as exc:
        logger.warning("Ticket %s has no usable total: %s", ticket.ticket_number, exc)
        return ZERO


def gross_sales_of(tickets: Iterable[TicketRecord]) -> Decimal:
    return sum((ticket_amount(t) for t in tickets), ZERO)


def group_tickets_by_draw(tickets: Iterable[TicketRecord]) -> Dict[int, List[TicketRecord]]:
    grouped: Dict[int, List[TicketRecord]] = {}
    for ticket in tickets:
        if ticket.draw_id is None:
            continue
        grouped.setdefault(ticket.draw_id, []).append(ticket)
    return grouped


def _newest_first(draws: Iterable[DrawRecord]) -> List[DrawRecord]:
    return sorted(draws, key=lambda d: (d.draw_date, d.draw_time or "", d.id), reverse=True)


def summarize_draws(
    draws: Iterable[DrawRecord],
    draw_tickets: Mapping[int, Sequence[TicketRecord]],
    calculator: PrizeCalculator,
) -> List[DrawSummary]:
    return [
        aggregate_draw(draw, draw_tickets.get(draw.id, ()), calculator)
        for draw in _newest_first(draws)
    ]


# ==================== Summary (all views combined) ====================
def _group_winnings_by_agent(draw_summaries: Iterable[DrawSummary]) -> Dict[str, dict]:
    """
    Winning bets grouped by agent display name, then by draw.

    The admin dashboard looks agents up by name, so two agents sharing a
    display name land in one entry that keeps the first agentId seen.
    agentSummaries in the agent report is the per-agent-id view.
    """
    by_agent: Dict[str, dict] = OrderedDict()
    for summary in draw_summaries:
        for win in summary.winning_tickets:
            entry = by_agent.setdefault(win.agent_name, {
                "agentId": win.agent_id,
                "expectedWinnings": ZERO,
                "claimedWinnings": ZERO,
                "pendingClaims": ZERO,
                "winningCount": 0,
                "claimedCount": 0,
                "draws": {},
            })
            entry["expectedWinnings"] += win.prize_amount
            entry["winningCount"] += 1

            draw_entry = entry["draws"].setdefault(str(win.draw_id), {
                "drawDate": win.draw_date,
                "expectedWinnings": ZERO,
                "claimedWinnings": ZERO,
                "winningCount": 0,
            })
            draw_entry["expectedWinnings"] += win.prize_amount
            draw_entry["winningCount"] += 1

            if win.is_claimed:
                entry["claimedWinnings"] += win.prize_amount
                entry["claimedCount"] += 1
                draw_entry["claimedWinnings"] += win.prize_amount
            else:
                entry["pendingClaims"] += win.prize_amount
    return by_agent


def build_summary_report(
    tickets: Sequence[TicketRecord],
    draws: Sequence[DrawRecord],
    draw_tickets: Mapping[int, Sequence[TicketRecord]],
    calculator: PrizeCalculator,
    period: Optional[dict] = None,
) -> dict:
    """
    Management summary: sales from `tickets`, payouts from `draws`.

    `tickets` is the filtered ticket population (date / agent / draw);
    `draw_tickets` holds the tickets of each draw in `draws`, keyed by draw id.
    """
    draw_summaries = summarize_draws(draws, draw_tickets, calculator)

    gross_sales = gross_sales_of(tickets)
    expected = sum((d.expected_payout for d in draw_summaries), ZERO)
    claimed = sum((d.claimed_payout for d in draw_summaries), ZERO)
    pending = expected - claimed
    net_sales = gross_sales - claimed

    winning_bets = [w for d in draw_summaries for w in d.winning_tickets]
    claimed_bets = [w for w in winning_bets if w.is_claimed]
    winning_ticket_count = sum(d.winning_tickets_count for d in draw_summaries)
    claimed_ticket_count = sum(d.claimed_tickets_count for d in draw_summaries)

    return {
        "period": period or {},
        "summary": {
            "grossSales": gross_sales,
            "expectedWinnings": expected,
            "claimedWinnings": claimed,
            "pendingClaims": pending,
            "netSales": net_sales,
            "totalTickets": len(tickets),
            "winningTickets": winning_ticket_count,
            "claimedTickets": claimed_ticket_count,
            "totalDraws": len(draw_summaries),
            "pendingDraws": sum(1 for d in draw_summaries if not d.is_settled),
        },
        "metrics": {
            "claimRate": safe_percent(claimed, expected),
            "profitMargin": safe_percent(net_sales, gross_sales),
            "winRate": safe_percent(winning_ticket_count, len(tickets)),
            "averagePrize": safe_ratio(expected, len(winning_bets)),
            "payoutRatio": safe_percent(expected, gross_sales),
        },
        "breakdown": {
            "byDraw": [d.to_dict() for d in draw_summaries],
            "byAgent": _group_winnings_by_agent(draw_summaries),
            "expectedWinnings": {
                "tickets": [w.to_dict() for w in winning_bets],
                "totalAmount": expected,
            },
            "claimedWinnings": {
                "tickets": [w.to_dict() for w in claimed_bets],
                "totalAmount": claimed,
            },
        },
    }


# ==================== By draw ====================
def build_draw_summary(
    draws: Sequence[DrawRecord],
    draw_tickets: Mapping[int, Sequence[TicketRecord]],
    calculator: PrizeCalculator,
    period: Optional[dict] = None,
) -> dict:
    draw_summaries = summarize_draws(draws, draw_tickets, calculator)

    totals = {
        "totalExpectedPayout": sum((d.expected_payout for d in draw_summaries), ZERO),
        "totalClaimedPayout": sum((d.claimed_payout for d in draw_summaries), ZERO),
        "totalPendingPayout": sum((d.pending_payout for d in draw_summaries), ZERO),
        "totalWinningTickets": sum(d.winning_tickets_count for d in draw_summaries),
        "totalClaimedTickets": sum(d.claimed_tickets_count for d in draw_summaries),
        "totalPendingTickets": sum(d.pending_tickets_count for d in draw_summaries),
        "totalTickets": sum(d.total_tickets for d in draw_summaries),
        "totalDraws": len(draw_summaries),
        "pendingResultsDraws": sum(1 for d in draw_summaries if not d.is_settled),
    }

    return {
        "drawSummaries": [d.to_dict(include_tickets=False) for d in draw_summaries],
        "totals": totals,
        "period": period or {},
    }


# ==================== By agent ====================
def _empty_agent_totals() -> dict:
    return {
        "grossSales": ZERO,
        "expectedWinnings": ZERO,
        "claimedWinnings": ZERO,
        "pendingClaims": ZERO,
        "netSales": ZERO,
        "totalTickets": 0,
        "winningTickets": 0,
        "claimedTickets": 0,
    }


def build_agent_summary(
    agents: Sequence[AgentRecord],
    tickets: Sequence[TicketRecord],
    draws_by_id: Mapping[int, DrawRecord],
    calculator: PrizeCalculator,
) -> dict:
    tickets_by_agent: Dict[int, List[TicketRecord]] = {}
    for ticket in tickets:
        tickets_by_agent.setdefault(ticket.user_id, []).append(ticket)

    rows = []
    for agent in agents:
        agent_tickets = tickets_by_agent.get(agent.id, [])
        gross_sales = gross_sales_of(agent_tickets)
        expected = ZERO
        claimed = ZERO
        winning_count = 0
        claimed_count = 0

        for ticket in agent_tickets:
            outcome = evaluate_ticket(ticket, draws_by_id.get(ticket.draw_id), calculator)
            if not outcome.is_winning:
                continue
            expected += outcome.expected_payout
            claimed += outcome.claimed_payout
            winning_count += 1
            if outcome.is_claimed_win:
                claimed_count += 1

        net_sales = gross_sales - claimed
        rows.append({
            "agentId": agent.id,
            "agentName": agent.display_name,
            "grossSales": gross_sales,
            "expectedWinnings": expected,
            "claimedWinnings": claimed,
            "pendingClaims": expected - claimed,
            "netSales": net_sales,
            "totalTickets": len(agent_tickets),
            "winningTickets": winning_count,
            "claimedTickets": claimed_count,
            "profitMargin": safe_percent(net_sales, gross_sales),
            "claimRate": safe_percent(claimed, expected),
            "winRate": safe_percent(winning_count, len(agent_tickets)),
        })

    rows.sort(key=lambda r: (-r["grossSales"], r["agentName"]))

    totals = _empty_agent_totals()
    for row in rows:
        for key in totals:
            totals[key] += row[key]

    return {
        "agentSummaries": rows,
        "totals": totals,
        "metrics": agent_metrics(totals),
    }


def agent_metrics(totals: dict) -> dict:
    return {
        "overallClaimRate": safe_percent(totals["claimedWinnings"], totals["expectedWinnings"]),
        "overallProfitMargin": safe_percent(totals["netSales"], totals["grossSales"]),
        "overallWinRate": safe_percent(totals["winningTickets"], totals["totalTickets"]),
    }


# ==================== By day ====================
def empty_day(day: date) -> dict:
    return {
        "date": day.isoformat(),
        "ticketCount": 0,
        "grossSales": ZERO,
        "expectedWinnings": ZERO,
        "claimedWinnings": ZERO,
        "pendingClaims": ZERO,
        "netSales": ZERO,
        "winningCount": 0,
        "claimedCount": 0,
        "winRate": ZERO,
        "claimRate": ZERO,
    }


def empty_daily_summary() -> dict:
    return {
        "totalDays": 0,
        "totalGrossSales": ZERO,
        "totalExpectedWinnings": ZERO,
        "totalClaimedWinnings": ZERO,
        "totalPendingClaims": ZERO,
        "totalNetSales": ZERO,
        "totalTickets": 0,
        "totalWinningCount": 0,
        "totalClaimedCount": 0,
    }


def daily_metrics(summary: dict) -> dict:
    return {
        "averageWinRate": safe_percent(summary["totalWinningCount"], summary["totalTickets"]),
        "averageClaimRate": safe_percent(summary["totalClaimedWinnings"], summary["totalExpectedWinnings"]),
        "overallProfitMargin": safe_percent(summary["totalNetSales"], summary["totalGrossSales"]),
    }


def build_daily_summary(
    tickets: Sequence[TicketRecord],
    draws_by_id: Mapping[int, DrawRecord],
    calculator: PrizeCalculator,
    days: int,
    today: date,
) -> dict:
    """
    One record per calendar day for the `days` days ending `today`, newest first.

    Days without tickets get an all-zero record so the series has no gaps.
    Tickets outside the window are ignored.
    """
    window = [today - timedelta(days=offset) for offset in range(days)]
    buckets: Dict[date, dict] = {day: empty_day(day) for day in window}

    for ticket in tickets:
        if ticket.created_at is None:
            logger.warning("Ticket %s has no creation time, left out of the daily summary", ticket.ticket_number)
            continue
        day = to_local_date(ticket.created_at)
        bucket = buckets.get(day)
        if bucket is None:
            continue

        bucket["ticketCount"] += 1
        bucket["grossSales"] += ticket_amount(ticket)

        outcome = evaluate_ticket(ticket, draws_by_id.get(ticket.draw_id), calculator)
        if outcome.is_winning:
            bucket["expectedWinnings"] += outcome.expected_payout
            bucket["claimedWinnings"] += outcome.claimed_payout
            bucket["winningCount"] += 1
            if outcome.is_claimed_win:
                bucket["claimedCount"] += 1

    daily_data = []
    for day in window:
        record = buckets[day]
        record["pendingClaims"] = record["expectedWinnings"] - record["claimedWinnings"]
        record["netSales"] = record["grossSales"] - record["claimedWinnings"]
        record["winRate"] = safe_percent(record["winningCount"], record["ticketCount"])
        record["claimRate"] = safe_percent(record["claimedWinnings"], record["expectedWinnings"])
        daily_data.append(record)

    summary = empty_daily_summary()
    summary["totalDays"] = len(daily_data)
    for record in daily_data:
        summary["totalGrossSales"] += record["grossSales"]
        summary["totalExpectedWinnings"] += record["expectedWinnings"]
        summary["totalClaimedWinnings"] += record["claimedWinnings"]
        summary["totalPendingClaims"] += record["pendingClaims"]
        summary["totalNetSales"] += record["netSales"]
        summary["totalTickets"] += record["ticketCount"]
        summary["totalWinningCount"] += record["winningCount"]
        summary["totalClaimedCount"] += record["claimedCount"]

    return {
        "dailyData": daily_data,
        "summary": summary,
        "metrics": daily_metrics(summary),
    }


def build_period(start: Optional[str] = None, end: Optional[str] = None, **filters) -> dict:
    period = {
        "startDate": start or ALL_TIME,
        "endDate": end or ALL_TIME,
    }
    period.update(filters)
    return period
