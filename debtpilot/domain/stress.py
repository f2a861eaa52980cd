"""Stress metrics - debt-to-income tiering and weighted risk score"""

from debtpilot.domain.models import StressLevel, StressMetrics
from debtpilot.utils.rounding import round_half_up, round_to_int

SAFE_RATIO_CEILING = 0.30
RISKY_RATIO_CEILING = 0.50


def classify_debt_ratio(debt_ratio: float) -> StressLevel:
    """
    Tier a debt ratio.

    - <= 30%:   SAFE
    - 30%-50%:  RISKY
    - > 50%:    DANGEROUS
    """
    if debt_ratio <= SAFE_RATIO_CEILING:
        return StressLevel.SAFE
    elif debt_ratio <= RISKY_RATIO_CEILING:
        return StressLevel.RISKY
    else:
        return StressLevel.DANGEROUS


def calculate_stress_metrics(
    monthly_income: float,
    monthly_expense: float,
    total_emi: float,
) -> StressMetrics:
    """
    Calculate debt ratio, stress tier and a 0-100 risk score (100 = worst).

    Risk score components (each capped, then summed and capped at 100):
    - 50 pts: debt ratio, saturating at 80%
    - 30 pts: EMI against disposable income (full 30 when nothing is disposable)
    - 20 pts: expense ratio, saturating at 100%

    No income at all short-circuits to DANGEROUS / 100.
    """
    if monthly_income <= 0:
        return StressMetrics(debt_ratio=0.0, stress_level=StressLevel.DANGEROUS, risk_score=100)

    debt_ratio = total_emi / monthly_income

    debt_ratio_score = min(debt_ratio / 0.8 * 50, 50)

    disposable_income = monthly_income - monthly_expense
    if disposable_income <= 0:
        disposable_score = 30
    elif total_emi <= 0:
        # No EMI to weigh against
        disposable_score = 0
    else:
        disposable_score = max(0, 30 - (disposable_income / total_emi) * 30)

    expense_score = min((monthly_expense / monthly_income) * 20, 20)

    risk_score = round_to_int(debt_ratio_score + disposable_score + expense_score)

    return StressMetrics(
        debt_ratio=round_half_up(debt_ratio, 4),
        stress_level=classify_debt_ratio(debt_ratio),
        risk_score=min(risk_score, 100),
    )
