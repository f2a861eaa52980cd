"""POST /v1/dashboard - headline EMI load and recent loans"""

import logging
from fastapi import APIRouter, Depends, HTTPException

from debtpilot.api.v1.schemas import DashboardResponse, PortfolioRequest, RecentLoanSchema
from debtpilot.api.dependencies import get_request_id
from debtpilot.domain.exceptions import InvalidLoanInputError
from debtpilot.domain.portfolio import dashboard_snapshot
from debtpilot.infrastructure.observability.metrics import invalid_input_counter

router = APIRouter()


@router.post("/dashboard", response_model=DashboardResponse)
def get_dashboard(request_body: PortfolioRequest, request_id: str = Depends(get_request_id)):
    """
    Dashboard snapshot for a borrower.

    Loans should be sent newest first; only active loans are counted.
    """
    try:
        snapshot = dashboard_snapshot(
            request_body.monthly_income,
            request_body.monthly_expense,
            [loan.to_domain() for loan in request_body.loans],
        )
    except InvalidLoanInputError as e:
        invalid_input_counter.inc()
        logging.warning(f"Invalid loan input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    return DashboardResponse(
        monthly_income=snapshot.monthly_income,
        monthly_expenses=snapshot.monthly_expenses,
        disposable_income=snapshot.disposable_income,
        total_emi=snapshot.total_emi,
        emi_ratio=snapshot.emi_ratio,
        stress_score=snapshot.stress_score,
        recent_loans=[
            RecentLoanSchema(
                id=r.loan.id,
                name=r.loan.name,
                amount=r.loan.amount,
                interest_rate=r.loan.interest_rate,
                tenure_months=r.loan.tenure_months,
                emi=r.emi,
                status=r.loan.status,
            )
            for r in snapshot.recent_loans
        ],
        loans_count=snapshot.loans_count,
    )
