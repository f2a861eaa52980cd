"""Debt health scoring - EMI burden against disposable income"""

from typing import List

from debtpilot.domain.amortization import compute_emi
from debtpilot.domain.models import HealthScore, LoanInput
from debtpilot.utils.rounding import round_half_up, round_to_int

# Points deducted for every loan beyond the first
EXTRA_LOAN_PENALTY = 5


def categorize_health(score: float) -> str:
    """
    Map a health score to a category.

    Bands:
    - 0 - 40:  High Risk
    - 40 - 70: Moderate
    - 70+:     Safe
    """
    if score < 40:
        return "High Risk"
    elif score < 70:
        return "Moderate"
    else:
        return "Safe"


def debt_health_score(
    monthly_income: float,
    monthly_expenses: float,
    loans: List[LoanInput],
) -> HealthScore:
    """
    Score 0 (worst) to 100 (best) from the share of disposable income eaten by EMIs.

    - ratio = total EMI / disposable income (1.0 when nothing is disposable)
    - base score = 100 - min(ratio, 1) * 100
    - each loan beyond the first costs EXTRA_LOAN_PENALTY points
    """
    disposable = max(0, monthly_income - monthly_expenses)
    total_emi = sum(compute_emi(l.amount, l.interest_rate, l.tenure_months) for l in loans)

    ratio = total_emi / disposable if disposable > 0 else 1
    raw_score = 100 - min(1, ratio) * 100

    penalty = max(0, len(loans) - 1) * EXTRA_LOAN_PENALTY
    score = max(0, raw_score - penalty)

    # Category is decided on the unrounded score
    return HealthScore(
        score=round_to_int(score),
        category=categorize_health(score),
        total_emi=round_half_up(total_emi),
    )
