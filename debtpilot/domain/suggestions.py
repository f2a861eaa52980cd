"""Suggestions and insights derived from stress metrics"""

from typing import List, Sequence

from debtpilot.domain.models import Insight, LoanInput, StressLevel, StressMetrics, Suggestion
from debtpilot.domain.priority import highest_interest_loan
from debtpilot.utils.rounding import round_to_int

# Share of income that can still go to new borrowing while SAFE
SAFE_BORROWING_SHARE = 0.25
# Debt ratio ceiling used for "room to borrow" insight
SAFE_ZONE_RATIO = 0.30
HIGH_EXPENSE_RATIO = 0.6
INCOME_BOOST_DEBT_RATIO = 0.4


def _percent(ratio: float) -> str:
    return f"{ratio * 100:.1f}%"


def stress_suggestions(debt_ratio: float, stress_level: StressLevel, monthly_income: float) -> List[Suggestion]:
    """Two baseline suggestions per stress tier"""
    if stress_level == StressLevel.SAFE:
        max_borrowable = monthly_income * SAFE_BORROWING_SHARE
        return [
            Suggestion(
                title="Financial Health Good",
                message=(
                    f"Your debt ratio is healthy at {_percent(debt_ratio)}. "
                    f"You can safely borrow up to ₹{round_to_int(max_borrowable)} more."
                ),
                priority="low",
            ),
            Suggestion(
                title="Maintain Your Discipline",
                message="Continue managing your expenses well. Consider building an emergency fund.",
                priority="low",
            ),
        ]
    elif stress_level == StressLevel.RISKY:
        return [
            Suggestion(
                title="Monitor Carefully",
                message=f"Your debt ratio is at {_percent(debt_ratio)}. Avoid taking new loans.",
                priority="medium",
            ),
            Suggestion(
                title="Action Items",
                message="Control expenses, increase income if possible, or consider debt consolidation.",
                priority="medium",
            ),
        ]
    else:
        return [
            Suggestion(
                title="Critical Situation",
                message=f"Your debt ratio is {_percent(debt_ratio)}. This requires immediate action.",
                priority="high",
            ),
            Suggestion(
                title="Urgent Recommendations",
                message=(
                    "Focus on closing high-interest loans, reduce non-essential spending, "
                    "increase income, or seek financial counseling."
                ),
                priority="high",
            ),
        ]


def build_suggestions(
    monthly_income: float,
    monthly_expense: float,
    loans: List[LoanInput],
    metrics: StressMetrics,
    total_emi: float,
) -> List[Suggestion]:
    """
    Full suggestion list for a borrower.

    Tier suggestions first, then loan, expense, income and savings
    suggestions when their triggers apply.
    """
    suggestions = stress_suggestions(metrics.debt_ratio, metrics.stress_level, monthly_income)

    costliest = highest_interest_loan(loans)
    if costliest is not None:
        suggestions.append(
            Suggestion(
                title="Reduce Highest Interest Loan",
                message=(
                    f"Your {costliest.name} at {costliest.interest_rate}% is costing you the most. "
                    "Consider paying extra towards this."
                ),
                priority="high" if metrics.stress_level == StressLevel.DANGEROUS else "medium",
            )
        )

    if monthly_income > 0:
        expense_ratio = monthly_expense / monthly_income
        if expense_ratio > HIGH_EXPENSE_RATIO:
            suggestions.append(
                Suggestion(
                    title="Reduce Expenses",
                    message=f"Your expenses are {expense_ratio * 100:.0f}% of income. Aim to reduce to under 60%.",
                    priority="high",
                )
            )

    if metrics.debt_ratio > INCOME_BOOST_DEBT_RATIO:
        suggestions.append(
            Suggestion(
                title="Increase Income",
                message="Consider taking additional income sources to reduce debt pressure.",
                priority="medium",
            )
        )

    disposable_income = monthly_income - monthly_expense - total_emi
    if disposable_income > 0:
        suggestions.append(
            Suggestion(
                title="Build Emergency Fund",
                message=(
                    f"You have ₹{round_to_int(disposable_income)} disposable income monthly. "
                    "Build a 6-month emergency fund."
                ),
                priority="low",
            )
        )

    return suggestions


def stress_insights(
    monthly_income: float,
    loans: List[LoanInput],
    metrics: StressMetrics,
    total_emi: float,
    history_scores: Sequence[int] = (),
) -> List[Insight]:
    """
    Narrative insights for the stress analysis view.

    `history_scores` are past risk scores, oldest first; the last two drive
    the trend insight.
    """
    insights = []

    if metrics.stress_level == StressLevel.SAFE:
        insights.append(
            Insight(
                type="positive",
                title="Your Debt is Healthy",
                message=(
                    f"Your debt-to-income ratio is {_percent(metrics.debt_ratio)}, which is in the safe "
                    "zone (≤30%). You're managing your finances well!"
                ),
            )
        )
        insights.append(
            Insight(
                type="info",
                title="Room for More Borrowing",
                message=(
                    f"You can safely borrow up to ₹{round_to_int(monthly_income * SAFE_ZONE_RATIO - total_emi)} "
                    "more without entering the risky zone."
                ),
            )
        )
    elif metrics.stress_level == StressLevel.RISKY:
        insights.append(
            Insight(
                type="warning",
                title="Watch Your Debt Levels",
                message=(
                    f"Your debt ratio is {_percent(metrics.debt_ratio)} (30-50%), which is in the warning "
                    "zone. Be careful about taking new loans."
                ),
            )
        )
        insights.append(
            Insight(
                type="action",
                title="Recommended Actions",
                message="Focus on reducing expenses or increasing income. Consider accelerating loan repayment.",
            )
        )
    else:
        insights.append(
            Insight(
                type="danger",
                title="Critical Debt Situation",
                message=(
                    f"Your debt ratio is {_percent(metrics.debt_ratio)} (>50%). This is unsustainable "
                    "and requires immediate attention."
                ),
            )
        )
        insights.append(
            Insight(
                type="action",
                title="Urgent Steps",
                message="Consider debt consolidation, significantly reduce expenses, or seek financial counseling.",
            )
        )
        costliest = highest_interest_loan(loans)
        if costliest is not None:
            insights.append(
                Insight(
                    type="action",
                    title="Prioritize Highest Interest Loan",
                    message=(
                        f"Focus on closing your {costliest.name} loan ({costliest.interest_rate}% interest) "
                        "first to reduce burden."
                    ),
                )
            )

    if len(history_scores) > 1:
        previous, latest = history_scores[-2], history_scores[-1]
        if latest > previous:
            insights.append(
                Insight(
                    type="warning",
                    title="Stress is Increasing",
                    message=f"Your stress level increased from {previous} to {latest} points in the last month.",
                )
            )
        elif latest < previous:
            insights.append(
                Insight(
                    type="positive",
                    title="Stress is Decreasing",
                    message=f"Great progress! Your stress level improved from {previous} to {latest} points.",
                )
            )

    return insights
