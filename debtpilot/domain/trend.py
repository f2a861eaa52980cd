"""Monthly EMI stress trend over recent months"""

from datetime import date
from typing import List, Optional

from debtpilot.domain.amortization import compute_emi, compute_end_date
from debtpilot.domain.models import LoanInput, TrendPoint
from debtpilot.utils.date_utils import month_range
from debtpilot.utils.rounding import round_half_up

# Day of month used to decide whether a loan was running in that month
REFERENCE_DAY = 15


def stress_trend(
    loans: List[LoanInput],
    monthly_income: float,
    months: int = 6,
    today: Optional[date] = None,
) -> List[TrendPoint]:
    """
    EMI load for each of the last `months` months, oldest first.

    A loan counts in a month if the 15th of that month falls between its
    start date and end date (inclusive). Loans without a start date are
    treated as starting today.
    """
    today = today or date.today()
    points = []

    for first_of_month in month_range(today, months):
        ref = first_of_month.replace(day=REFERENCE_DAY)
        total_emi = 0.0
        for loan in loans:
            start = loan.start_date or today
            end = compute_end_date(start, loan.tenure_months)
            if start <= ref <= end:
                total_emi += compute_emi(loan.amount, loan.interest_rate, loan.tenure_months)

        stress = total_emi / monthly_income * 100 if monthly_income > 0 else 0.0
        points.append(
            TrendPoint(
                month=ref.strftime("%b"),
                emi=round_half_up(total_emi),
                income=monthly_income,
                stress=round_half_up(stress),
            )
        )

    return points
