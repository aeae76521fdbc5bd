import dataclasses
import datetime as dt
from decimal import Decimal

import pytz

from lotto_admin.core.report_builder import (
    build_agent_summary,
    build_daily_summary,
    build_draw_summary,
    build_period,
    build_summary_report,
    group_tickets_by_draw,
    safe_percent,
)

from factories import make_agent, make_draw, make_ticket, utc


def test_safe_percent_guards_zero_denominator() -> None:
    assert safe_percent(5, 0) == 0
    assert safe_percent(0, 0) == 0
    assert safe_percent(1, 4) == Decimal("25.00")


def test_end_to_end_single_straight_winner(calculator) -> None:
    draw = make_draw(winning_numbers=("456",))
    ticket = make_ticket(1, [("456", "straight", "10")], status="pending")

    report = build_summary_report([ticket], [draw], group_tickets_by_draw([ticket]), calculator, build_period())
    summary = report["summary"]

    assert summary["expectedWinnings"] == 45000
    assert summary["claimedWinnings"] == 0
    assert summary["pendingClaims"] == 45000
    assert summary["grossSales"] == 10
    assert summary["netSales"] == 10
    assert summary["winningTickets"] == 1
    assert report["metrics"]["winRate"] == 100
    assert report["metrics"]["claimRate"] == 0
    assert report["period"] == {"startDate": "All time", "endDate": "All time"}


def test_summary_breakdown_by_agent_and_claims(calculator) -> None:
    maria = make_agent(2, "maria", "Maria Santos")
    draw = make_draw(winning_numbers=("123",))
    tickets = [
        make_ticket(1, [("123", "straight", "1")], status="claimed"),
        make_ticket(2, [("321", "rambolito", "2")], status="pending", agent=maria),
        make_ticket(3, [("999", "straight", "5")]),
    ]

    report = build_summary_report(tickets, [draw], group_tickets_by_draw(tickets), calculator)
    by_agent = report["breakdown"]["byAgent"]

    assert by_agent["Juan Dela Cruz"]["claimedWinnings"] == Decimal("4500")
    assert by_agent["Juan Dela Cruz"]["pendingClaims"] == 0
    assert by_agent["Juan Dela Cruz"]["draws"]["1"]["claimedWinnings"] == Decimal("4500")
    assert by_agent["Maria Santos"]["pendingClaims"] == Decimal("1500")
    assert by_agent["Maria Santos"]["agentId"] == 2

    assert report["summary"]["grossSales"] == Decimal("8")
    assert report["summary"]["netSales"] == Decimal("8") - Decimal("4500")
    assert report["breakdown"]["claimedWinnings"]["totalAmount"] == Decimal("4500")
    assert len(report["breakdown"]["expectedWinnings"]["tickets"]) == 2
    assert report["metrics"]["averagePrize"] == Decimal("3000.00")


def test_by_agent_merges_agents_sharing_a_display_name(calculator) -> None:
    first = make_agent(1, "juan1", "Juan Dela Cruz")
    second = make_agent(7, "juan7", "Juan Dela Cruz")
    draw = make_draw(winning_numbers=("123",))
    tickets = [
        make_ticket(1, [("123", "straight", "1")], agent=first),
        make_ticket(2, [("123", "straight", "2")], agent=second),
    ]

    by_agent = build_summary_report(tickets, [draw], group_tickets_by_draw(tickets), calculator)["breakdown"]["byAgent"]

    assert list(by_agent) == ["Juan Dela Cruz"]
    assert by_agent["Juan Dela Cruz"]["agentId"] == 1
    assert by_agent["Juan Dela Cruz"]["winningCount"] == 2
    assert by_agent["Juan Dela Cruz"]["expectedWinnings"] == Decimal("13500")


def test_summary_counts_pending_draws(calculator) -> None:
    settled = make_draw(1, ("123",), draw_date=dt.date(2026, 10, 18))
    pending = make_draw(2, (), draw_date=dt.date(2026, 10, 19))
    tickets = [make_ticket(1, [("123", "straight", "1")], draw_id=1), make_ticket(2, [("123", "straight", "1")], draw_id=2)]

    report = build_summary_report(tickets, [settled, pending], group_tickets_by_draw(tickets), calculator)

    assert report["summary"]["totalDraws"] == 2
    assert report["summary"]["pendingDraws"] == 1
    assert report["summary"]["expectedWinnings"] == Decimal("4500")
    by_draw = report["breakdown"]["byDraw"]
    assert [d["drawId"] for d in by_draw] == [2, 1]
    assert by_draw[0]["resultsStatus"] == "pending_results"
    assert by_draw[0]["expectedPayout"] == 0


def test_draw_summary_newest_first_with_totals(calculator) -> None:
    draws = [
        make_draw(1, ("111",), draw_date=dt.date(2026, 10, 17)),
        make_draw(2, ("222",), draw_date=dt.date(2026, 10, 19)),
        make_draw(3, ("333",), draw_date=dt.date(2026, 10, 18)),
    ]
    tickets = [
        make_ticket(1, [("111", "straight", "1")], draw_id=1, status="claimed"),
        make_ticket(2, [("222", "straight", "2")], draw_id=2),
        make_ticket(3, [("000", "straight", "2")], draw_id=3),
    ]

    result = build_draw_summary(draws, group_tickets_by_draw(tickets), calculator, build_period(status="completed"))

    assert [d["drawId"] for d in result["drawSummaries"]] == [2, 3, 1]
    totals = result["totals"]
    assert totals["totalExpectedPayout"] == Decimal("13500")
    assert totals["totalClaimedPayout"] == Decimal("4500")
    assert totals["totalPendingPayout"] == Decimal("9000")
    assert totals["totalWinningTickets"] == 2
    assert totals["totalClaimedTickets"] == 1
    assert totals["totalPendingTickets"] == 1
    assert totals["totalTickets"] == 3
    assert result["period"]["status"] == "completed"
    assert "winningTickets" not in result["drawSummaries"][0]


def test_agent_summary_lists_every_agent_with_guarded_ratios(calculator) -> None:
    juan = make_agent(1, "juan", "Juan Dela Cruz")
    idle = make_agent(2, "idle", None)
    draw = make_draw(1, ("123",))
    tickets = [
        make_ticket(1, [("123", "straight", "1")], status="claimed", agent=juan),
        make_ticket(2, [("777", "straight", "3")], agent=juan),
    ]

    result = build_agent_summary([juan, idle], tickets, {1: draw}, calculator)
    rows = {r["agentId"]: r for r in result["agentSummaries"]}

    assert rows[1]["grossSales"] == Decimal("4")
    assert rows[1]["expectedWinnings"] == Decimal("4500")
    assert rows[1]["claimedWinnings"] == Decimal("4500")
    assert rows[1]["netSales"] == Decimal("4") - Decimal("4500")
    assert rows[1]["winRate"] == Decimal("50.00")
    assert rows[1]["claimRate"] == Decimal("100.00")

    assert rows[2]["agentName"] == "idle"
    assert rows[2]["totalTickets"] == 0
    assert rows[2]["winRate"] == 0
    assert rows[2]["claimRate"] == 0
    assert rows[2]["profitMargin"] == 0

    assert result["agentSummaries"][0]["agentId"] == 1
    assert result["totals"]["totalTickets"] == 2
    assert result["metrics"]["overallWinRate"] == Decimal("50.00")


def test_agent_summary_with_no_agents(calculator) -> None:
    result = build_agent_summary([], [], {}, calculator)
    assert result["agentSummaries"] == []
    assert result["totals"]["grossSales"] == 0
    assert result["metrics"] == {"overallClaimRate": 0, "overallProfitMargin": 0, "overallWinRate": 0}


def test_daily_summary_has_no_gaps(calculator) -> None:
    today = dt.date(2026, 10, 19)
    draw = make_draw(1, ("123",))
    tickets = [
        make_ticket(1, [("123", "straight", "1")], status="claimed", created_at=utc(2026, 10, 19, 2)),
        make_ticket(2, [("555", "straight", "5")], created_at=utc(2026, 10, 16, 2)),
        make_ticket(3, [("123", "straight", "1")], created_at=utc(2026, 9, 1, 2)),
    ]

    result = build_daily_summary(tickets, {1: draw}, calculator, 7, today)
    daily = result["dailyData"]

    assert len(daily) == 7
    assert [d["date"] for d in daily] == [(today - dt.timedelta(days=i)).isoformat() for i in range(7)]
    assert daily[0]["ticketCount"] == 1
    assert daily[0]["claimedWinnings"] == Decimal("4500")
    assert daily[3]["grossSales"] == Decimal("5")
    assert daily[3]["winRate"] == 0

    empty = daily[1]
    assert empty["ticketCount"] == 0
    assert empty["grossSales"] == 0
    assert empty["expectedWinnings"] == 0
    assert empty["winRate"] == 0
    assert empty["claimRate"] == 0

    assert result["summary"]["totalDays"] == 7
    assert result["summary"]["totalTickets"] == 2
    assert result["summary"]["totalGrossSales"] == Decimal("6")


def test_daily_summary_buckets_by_local_date(calculator) -> None:
    # 20:00 UTC on the 18th is already the 19th in Manila (UTC+8)
    ticket = make_ticket(1, [("000", "straight", "1")], created_at=utc(2026, 10, 18, 20))
    result = build_daily_summary([ticket], {}, calculator, 2, dt.date(2026, 10, 19))
    assert [d["ticketCount"] for d in result["dailyData"]] == [1, 0]


def test_daily_summary_treats_naive_timestamps_as_utc(calculator) -> None:
    ticket = make_ticket(1, [("000", "straight", "1")], created_at=dt.datetime(2026, 10, 18, 20))
    result = build_daily_summary([ticket], {}, calculator, 2, dt.date(2026, 10, 19))
    assert result["dailyData"][0]["ticketCount"] == 1


def test_daily_summary_skips_tickets_without_timestamp(calculator, caplog) -> None:
    undated = dataclasses.replace(make_ticket(1, [("000", "straight", "5")]), created_at=None)
    dated = make_ticket(2, [("000", "straight", "1")], created_at=utc(2026, 10, 19, 4))

    with caplog.at_level("WARNING"):
        result = build_daily_summary([undated, dated], {}, calculator, 3, dt.date(2026, 10, 19))

    assert result["summary"]["totalTickets"] == 1
    assert result["dailyData"][0]["grossSales"] == Decimal("1")
    assert "T-00001" in caplog.text


def test_daily_summary_empty_input(calculator) -> None:
    result = build_daily_summary([], {}, calculator, 7, dt.date(2026, 10, 19))
    assert len(result["dailyData"]) == 7
    assert result["metrics"] == {"averageWinRate": 0, "averageClaimRate": 0, "overallProfitMargin": 0}
