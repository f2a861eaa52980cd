"""POST /v1/loans/simulate and /v1/portfolio/simulate - what-if payoff projections"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException

from debtpilot.api.v1.schemas import (
    PortfolioSimulationRequest,
    PortfolioSimulationResponse,
    SimulationRequest,
    SimulationResponse,
)
from debtpilot.api.dependencies import get_request_id
from debtpilot.domain.exceptions import InvalidLoanInputError
from debtpilot.domain.simulation import simulate, simulate_portfolio
from debtpilot.infrastructure.observability.logging import log_simulation
from debtpilot.infrastructure.observability.metrics import invalid_input_counter, record_simulation

router = APIRouter()


@router.post("/loans/simulate", response_model=SimulationResponse)
def simulate_loan(request_body: SimulationRequest, request_id: str = Depends(get_request_id)):
    """
    Project payoff of one loan with an extra monthly payment and/or prepayment.

    When `pays_off` is false the plan never clears the balance and `months`
    holds the 1200-month cap rather than a real duration.
    """
    start_time = time.time()

    try:
        result = simulate(request_body.loan.to_domain(), request_body.what_if.to_domain())
    except InvalidLoanInputError as e:
        invalid_input_counter.inc()
        logging.warning(f"Invalid loan input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    duration_ms = (time.time() - start_time) * 1000
    record_simulation("loan", result.outcome.value)
    log_simulation(request_id, "loan", result.outcome.value, result.months, duration_ms)

    return SimulationResponse(
        months=result.months,
        new_end_date=result.new_end_date,
        interest_saved=result.interest_saved,
        new_monthly_payment=result.new_monthly_payment,
        outcome=result.outcome.value,
        pays_off=result.pays_off,
    )


@router.post("/portfolio/simulate", response_model=PortfolioSimulationResponse)
def simulate_all_loans(request_body: PortfolioSimulationRequest, request_id: str = Depends(get_request_id)):
    """Rough what-if across all loans with new income, expenses and EMI adjustment"""
    start_time = time.time()

    try:
        result = simulate_portfolio(
            [loan.to_domain() for loan in request_body.loans],
            request_body.new_income,
            request_body.new_expenses,
            request_body.emi_adjustment,
        )
    except InvalidLoanInputError as e:
        invalid_input_counter.inc()
        logging.warning(f"Invalid loan input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    duration_ms = (time.time() - start_time) * 1000
    record_simulation("portfolio", "estimated")
    log_simulation(request_id, "portfolio", "estimated", 0, duration_ms)

    return PortfolioSimulationResponse(
        interest_saved=result.interest_saved,
        new_debt_free_date=result.new_debt_free_date,
        updated_debt_score=result.updated_debt_score,
    )
