"""Portfolio-wide aggregates - insights summary and dashboard snapshot"""

from typing import List

from debtpilot.domain.amortization import compute_emi, compute_total_interest
from debtpilot.domain.models import (
    DashboardSnapshot,
    FinancialHealthSummary,
    LoanDiversity,
    LoanInput,
    PortfolioInsights,
    RecentLoan,
)
from debtpilot.utils.rounding import round_half_up

ACTIVE_STATUS = "ACTIVE"
CLOSED_STATUS = "CLOSED"

DASHBOARD_RECENT_LOANS = 5

# Dashboard stress score by EMI share of disposable income
LOW_STRESS_RATIO = 0.3
HIGH_STRESS_RATIO = 0.5
LOW_STRESS_SCORE = 85
MODERATE_STRESS_SCORE = 65
HIGH_STRESS_SCORE = 40


def is_active(loan: LoanInput) -> bool:
    return loan.status.upper() == ACTIVE_STATUS


def is_closed(loan: LoanInput) -> bool:
    return loan.status.upper() == CLOSED_STATUS


def _loan_diversity(loans: List[LoanInput]) -> LoanDiversity:
    names = [loan.name for loan in loans]
    return LoanDiversity(
        home_loans=names.count("Home Loan"),
        car_loans=names.count("Car Loan"),
        personal_loans=names.count("Personal Loan"),
        education_loans=names.count("Education Loan"),
    )


def portfolio_insights(monthly_income: float, monthly_expense: float, loans: List[LoanInput]) -> PortfolioInsights:
    """
    Summarise a borrower's loan book.

    Active loans drive borrowing, average rate, diversity and monthly EMI.
    Closed loans count as repaid, with their full scheduled interest as paid.
    Loans with any other status are ignored.

    Raises:
        InvalidLoanInputError: a loan cannot produce an EMI
    """
    active = [loan for loan in loans if is_active(loan)]
    closed = [loan for loan in loans if is_closed(loan)]

    monthly_emi = round_half_up(sum(compute_emi(l.amount, l.interest_rate, l.tenure_months) for l in active))
    average_rate = sum(l.interest_rate for l in active) / len(active) if active else 0.0

    return PortfolioInsights(
        total_borrowed=round_half_up(sum(l.amount for l in active)),
        total_repaid=round_half_up(sum(l.amount for l in closed)),
        total_interest_paid=round_half_up(
            sum(compute_total_interest(l.amount, l.interest_rate, l.tenure_months) for l in closed)
        ),
        average_interest_rate=round_half_up(average_rate),
        loan_diversity=_loan_diversity(active),
        financial_health=FinancialHealthSummary(
            monthly_income=monthly_income,
            monthly_expense=monthly_expense,
            monthly_emi=monthly_emi,
            disposable_income=max(round_half_up(monthly_income - monthly_expense - monthly_emi), 0.0),
        ),
    )


def dashboard_stress_score(emi_ratio: float) -> int:
    """Bucket EMI / disposable income into a coarse stress score (higher is calmer)"""
    if emi_ratio < LOW_STRESS_RATIO:
        return LOW_STRESS_SCORE
    elif emi_ratio <= HIGH_STRESS_RATIO:
        return MODERATE_STRESS_SCORE
    return HIGH_STRESS_SCORE


def dashboard_snapshot(monthly_income: float, monthly_expenses: float, loans: List[LoanInput]) -> DashboardSnapshot:
    """
    Headline figures for the dashboard.

    Only active loans are counted. `loans` is expected newest first; the
    first DASHBOARD_RECENT_LOANS of them are returned as recent loans.
    Disposable income here ignores EMI, so the ratio is EMI against what is
    left after expenses. With nothing left the ratio is 1.

    Raises:
        InvalidLoanInputError: a loan cannot produce an EMI
    """
    active = [loan for loan in loans if is_active(loan)]
    emis = [compute_emi(l.amount, l.interest_rate, l.tenure_months) for l in active]

    disposable_income = max(0.0, monthly_income - monthly_expenses)
    total_emi = round_half_up(sum(emis))
    emi_ratio = total_emi / disposable_income if disposable_income > 0 else 1.0

    return DashboardSnapshot(
        monthly_income=monthly_income,
        monthly_expenses=monthly_expenses,
        disposable_income=disposable_income,
        total_emi=total_emi,
        emi_ratio=round_half_up(emi_ratio),
        stress_score=dashboard_stress_score(emi_ratio),
        recent_loans=[RecentLoan(loan=l, emi=e) for l, e in zip(active, emis)][:DASHBOARD_RECENT_LOANS],
        loans_count=len(active),
    )
