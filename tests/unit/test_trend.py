"""Unit tests for the monthly EMI stress trend"""

from datetime import date
from debtpilot.domain.amortization import compute_emi
from debtpilot.domain.models import LoanInput
from debtpilot.domain.trend import stress_trend

TODAY = date(2025, 6, 20)


def test_trend_covers_last_six_months_oldest_first():
    points = stress_trend([], 50000, today=TODAY)

    assert [p.month for p in points] == ["Jan", "Feb", "Mar", "Apr", "May", "Jun"]
    assert all(p.emi == 0 and p.stress == 0 for p in points)
    assert all(p.income == 50000 for p in points)


def test_loan_counts_only_while_running():
    """Starts Mar 1, ends May 1: active on Mar 15 and Apr 15 only"""
    loan = LoanInput(amount=20000, interest_rate=0, tenure_months=2, start_date=date(2025, 3, 1))
    points = stress_trend([loan], 50000, today=TODAY)

    by_month = {p.month: p for p in points}
    assert by_month["Feb"].emi == 0
    assert by_month["Mar"].emi == 10000
    assert by_month["Apr"].emi == 10000
    assert by_month["May"].emi == 0
    assert by_month["Mar"].stress == 20.0


def test_loans_without_start_date_start_today():
    loan = LoanInput(amount=120000, interest_rate=10, tenure_months=12)
    points = stress_trend([loan], 100000, today=TODAY)

    # Jun 15 is before today
    assert all(p.emi == 0 for p in points)


def test_overlapping_loans_sum():
    loans = [
        LoanInput(amount=240000, interest_rate=9, tenure_months=24, start_date=date(2024, 12, 1)),
        LoanInput(amount=60000, interest_rate=0, tenure_months=12, start_date=date(2025, 4, 10)),
    ]
    points = stress_trend(loans, 40000, months=3, today=TODAY)

    assert [p.month for p in points] == ["Apr", "May", "Jun"]
    expected = compute_emi(240000, 9, 24) + 5000
    assert points[-1].emi == round(expected, 2)


def test_zero_income_reports_zero_stress():
    loan = LoanInput(amount=12000, interest_rate=0, tenure_months=12, start_date=date(2025, 1, 1))
    points = stress_trend([loan], 0, today=TODAY)

    assert points[-1].emi == 1000
    assert points[-1].stress == 0


def test_trend_crosses_year_boundary():
    points = stress_trend([], 1000, months=4, today=date(2026, 2, 3))
    assert [p.month for p in points] == ["Nov", "Dec", "Jan", "Feb"]
