"""Loan payoff priority - which loan to attack first"""

from typing import List, Optional

from debtpilot.domain.amortization import compute_emi
from debtpilot.domain.models import LoanInput, PriorityResult

PRIORITY_REASON = "Highest interest rate and EMI impact"
PRIORITY_SUGGESTION = "Prioritize extra payments here to reduce total interest."


def loan_priority(loans: List[LoanInput]) -> Optional[PriorityResult]:
    """
    Pick the loan to pay down first.

    Ordering: interest rate (desc), then EMI (desc). Ties keep input order.
    Returns None when there are no loans.
    """
    if not loans:
        return None

    with_emi = [(loan, compute_emi(loan.amount, loan.interest_rate, loan.tenure_months)) for loan in loans]
    ranked = sorted(with_emi, key=lambda pair: (-pair[0].interest_rate, -pair[1]))
    top, top_emi = ranked[0]

    return PriorityResult(
        loan=top,
        emi=top_emi,
        reason=PRIORITY_REASON,
        suggestion=PRIORITY_SUGGESTION,
    )


def highest_interest_loan(loans: List[LoanInput]) -> Optional[LoanInput]:
    """First loan carrying the maximum interest rate, ignoring EMI"""
    if not loans:
        return None
    return max(loans, key=lambda loan: loan.interest_rate)
