from fastapi import APIRouter

from dealership.api.v1.loans.schemas import LoanEstimateRequest, LoanEstimateResponse, LoanScheduleResponse
from dealership.api.v1.loans.service import LoanService

router = APIRouter()


@router.post(
    "/estimate",
    response_model=LoanEstimateResponse,
    summary="EMI estimate",
    description="Monthly installment for a price, down payment, annual rate and tenure. Unset terms use the calculator defaults.",
)
async def estimate_loan(data: LoanEstimateRequest):
    return LoanService().estimate(data)


@router.post(
    "/schedule",
    response_model=LoanScheduleResponse,
    summary="Amortization schedule",
)
async def loan_schedule(data: LoanEstimateRequest):
    return LoanService().schedule(data)
