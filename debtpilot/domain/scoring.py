"""Scoring strategies - two independent ways to judge a borrower's debt load"""

from typing import Dict, Protocol, Union

from debtpilot.domain.amortization import compute_emi
from debtpilot.domain.exceptions import UnknownScorerError
from debtpilot.domain.health import debt_health_score
from debtpilot.domain.models import FinancialProfile, HealthScore, StressMetrics
from debtpilot.domain.stress import calculate_stress_metrics


class Scorer(Protocol):
    """Anything that turns a financial profile into a score"""

    name: str

    def score(self, profile: FinancialProfile) -> Union[HealthScore, StressMetrics]:
        ...


class DebtHealthScorer:
    """EMI against disposable income, penalized per extra loan (higher is better)"""

    name = "debt_health"

    def score(self, profile: FinancialProfile) -> HealthScore:
        return debt_health_score(profile.monthly_income, profile.monthly_expenses, profile.loans)


class StressMetricsScorer:
    """Debt ratio tiers plus weighted risk factors (higher is worse)"""

    name = "stress_metrics"

    def score(self, profile: FinancialProfile) -> StressMetrics:
        total_emi = sum(compute_emi(l.amount, l.interest_rate, l.tenure_months) for l in profile.loans)
        return calculate_stress_metrics(profile.monthly_income, profile.monthly_expenses, total_emi)


SCORERS: Dict[str, Scorer] = {
    DebtHealthScorer.name: DebtHealthScorer(),
    StressMetricsScorer.name: StressMetricsScorer(),
}


def get_scorer(name: str) -> Scorer:
    """Look up a scoring strategy by name"""
    try:
        return SCORERS[name]
    except KeyError:
        raise UnknownScorerError(f"Unknown scorer '{name}', expected one of {sorted(SCORERS)}") from None
