"""Payoff simulation - what-if extra payments and prepayments"""

import math
from datetime import date
from typing import List, Optional, Tuple

from debtpilot.domain.amortization import compute_emi, compute_total_interest, monthly_rate
from debtpilot.domain.health import debt_health_score
from debtpilot.domain.models import (
    LoanInput,
    PayoffOutcome,
    PortfolioSimulationResult,
    SimulationResult,
    WhatIf,
)
from debtpilot.utils.date_utils import add_months
from debtpilot.utils.rounding import round_half_up

# 100 years. A simulation that reaches this never pays the loan off.
MAX_SIMULATION_MONTHS = 1200

# Portfolio what-if caps
PORTFOLIO_INTEREST_SAVED_SHARE = 0.1
PORTFOLIO_MAX_TENURE_REDUCTION = 0.5


def _run_schedule(principal: float, payment: float, r: float) -> Tuple[int, float, bool]:
    """
    Walk an amortization schedule month by month.

    Returns: (months, interest_paid, paid_off)
    """
    months = 0
    interest_paid = 0.0

    if r == 0:
        if principal <= 0:
            return 0, 0.0, True
        if payment <= 0:
            return MAX_SIMULATION_MONTHS, 0.0, False
        return math.ceil(principal / payment), 0.0, True

    while principal > 0 and months < MAX_SIMULATION_MONTHS:
        interest = principal * r
        principal_portion = min(principal, payment - interest)
        if principal_portion <= 0:
            # Payment does not cover interest: balance can never fall
            return MAX_SIMULATION_MONTHS, interest_paid, False
        principal -= principal_portion
        interest_paid += interest
        months += 1

    return months, interest_paid, principal <= 0


def simulate(loan: LoanInput, what_if: WhatIf, today: Optional[date] = None) -> SimulationResult:
    """
    Project payoff of a loan under an extra monthly payment and/or a lump-sum prepayment.

    The prepayment is applied to principal at time zero; the extra payment is
    added on top of the loan's original EMI every month.

    When the plan never clears the balance (payment below monthly interest, or
    MAX_SIMULATION_MONTHS reached) the result has outcome NEVER_PAYS_OFF,
    months == MAX_SIMULATION_MONTHS and no interest saved. A plan with no extra
    payment and no prepayment also saves nothing.

    Raises:
        InvalidLoanInputError: loan figures cannot produce an EMI
    """
    base_emi = compute_emi(loan.amount, loan.interest_rate, loan.tenure_months)
    r = monthly_rate(loan.interest_rate)

    principal = max(0, loan.amount - what_if.prepayment)
    payment = base_emi + what_if.extra_monthly_payment

    months, interest_paid, paid_off = _run_schedule(principal, payment, r)

    baseline_interest = compute_total_interest(loan.amount, loan.interest_rate, loan.tenure_months)
    if not paid_off or (what_if.extra_monthly_payment == 0 and what_if.prepayment == 0):
        # An unchanged plan is the baseline; cent rounding of the EMI must not show up as savings
        interest_saved = 0.0
    else:
        interest_saved = max(0.0, round_half_up(baseline_interest - interest_paid))

    return SimulationResult(
        months=months,
        new_end_date=add_months(today or date.today(), months),
        interest_saved=interest_saved,
        new_monthly_payment=round_half_up(payment),
        outcome=PayoffOutcome.PAID_OFF if paid_off else PayoffOutcome.NEVER_PAYS_OFF,
    )


def simulate_portfolio(
    loans: List[LoanInput],
    new_income: float,
    new_expenses: float,
    emi_adjustment: float,
    today: Optional[date] = None,
) -> PortfolioSimulationResult:
    """
    Rough what-if across every loan with a changed income, expenses and total EMI.

    Estimates:
    - interest saved: 10% of total scheduled interest when EMI goes up
    - debt-free date: average tenure shortened in proportion to the EMI increase,
      by at most half
    - debt score: health score under the new income and expenses
    """
    today = today or date.today()
    updated_score = debt_health_score(new_income, new_expenses, loans).score

    if not loans:
        return PortfolioSimulationResult(
            interest_saved=0.0,
            new_debt_free_date=today,
            updated_debt_score=updated_score,
        )

    current_total_emi = sum(compute_emi(l.amount, l.interest_rate, l.tenure_months) for l in loans)
    total_interest = sum(compute_total_interest(l.amount, l.interest_rate, l.tenure_months) for l in loans)

    interest_saved = 0.0
    if emi_adjustment > 0:
        interest_saved = min(total_interest * PORTFOLIO_INTEREST_SAVED_SHARE, total_interest)

    average_tenure = sum(l.tenure_months for l in loans) / len(loans)
    reduction = emi_adjustment / current_total_emi if current_total_emi > 0 else 0.0
    new_months = int(average_tenure * (1 - min(reduction, PORTFOLIO_MAX_TENURE_REDUCTION)))

    return PortfolioSimulationResult(
        interest_saved=round_half_up(max(0.0, interest_saved)),
        new_debt_free_date=add_months(today, new_months),
        updated_debt_score=updated_score,
    )
