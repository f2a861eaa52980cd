"""Amortization math - EMI, total interest and loan end date"""

import math
from datetime import date
from decimal import InvalidOperation
from typing import Optional

from debtpilot.domain.exceptions import InvalidLoanInputError
from debtpilot.domain.models import AmortizationResult, LoanInput
from debtpilot.utils.date_utils import add_months
from debtpilot.utils.rounding import round_half_up


def monthly_rate(annual_rate_percent: float) -> float:
    """Convert an annual percentage rate to a monthly fraction"""
    return annual_rate_percent / 12 / 100


def _to_cents(value: float) -> float:
    """Round a schedule figure to cents, rejecting results outside the representable range"""
    if not math.isfinite(value):
        raise InvalidLoanInputError("Loan figures are out of numeric range")
    try:
        return round_half_up(value)
    except InvalidOperation:
        raise InvalidLoanInputError("Loan figures are out of numeric range") from None


def compute_emi(amount: float, annual_rate_percent: float, tenure_months: int) -> float:
    """
    Equated monthly installment for a fully amortizing loan.

    Formula:
        r = annual_rate / 12 / 100
        emi = P * r * (1 + r)^n / ((1 + r)^n - 1), or P / n when r == 0

    Result is rounded to 2 decimals, half-up.

    Raises:
        InvalidLoanInputError: tenure is not positive, an argument is not finite,
            or the result is out of numeric range
    """
    if not all(math.isfinite(v) for v in (amount, annual_rate_percent, tenure_months)):
        raise InvalidLoanInputError("Loan amount, rate and tenure must be finite numbers")
    if tenure_months <= 0:
        raise InvalidLoanInputError(f"Tenure must be at least 1 month, got {tenure_months}")

    r = monthly_rate(annual_rate_percent)
    if r == 0:
        return _to_cents(amount / tenure_months)

    try:
        growth = (1 + r) ** tenure_months
    except OverflowError:
        raise InvalidLoanInputError(
            f"Rate {annual_rate_percent}% over {tenure_months} months is out of numeric range"
        ) from None
    return _to_cents(amount * r * growth / (growth - 1))


def compute_total_interest(amount: float, annual_rate_percent: float, tenure_months: int) -> float:
    """
    Total interest over the full schedule: emi * n - principal.

    Not clamped at zero; EMI rounding can push a near-zero result
    slightly negative (within 0.01 per month of tenure).
    """
    emi = compute_emi(amount, annual_rate_percent, tenure_months)
    return _to_cents(emi * tenure_months - amount)


def compute_end_date(start_date: Optional[date], tenure_months: int) -> date:
    """Date the final installment falls due (start + tenure calendar months)"""
    try:
        return add_months(start_date or date.today(), tenure_months)
    except (ValueError, OverflowError):
        raise InvalidLoanInputError(f"End date for a {tenure_months}-month tenure is out of range") from None


def amortize(loan: LoanInput) -> AmortizationResult:
    """Compute all derived schedule figures for a loan"""
    return AmortizationResult(
        emi=compute_emi(loan.amount, loan.interest_rate, loan.tenure_months),
        total_interest=compute_total_interest(loan.amount, loan.interest_rate, loan.tenure_months),
        end_date=compute_end_date(loan.start_date, loan.tenure_months),
    )
