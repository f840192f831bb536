"""Stateless loan calculator endpoints on top of dealership.core.amortization."""
from dealership.api.v1.loans.schemas import (
    LoanEstimateRequest,
    LoanEstimateResponse,
    LoanScheduleResponse,
    ScheduleRowResponse,
)
from dealership.core import amortization
from dealership.core.exceptions import AppException


def _resolve_terms(data: LoanEstimateRequest) -> dict:
    terms = amortization.default_terms(data.price)
    for field in ("down_payment", "annual_rate_percent", "tenure_months"):
        value = getattr(data, field)
        if value is not None:
            terms[field] = value
    return terms


class LoanService:
    def estimate(self, data: LoanEstimateRequest) -> LoanEstimateResponse:
        terms = _resolve_terms(data)
        try:
            breakdown = amortization.compute(data.price, **terms)
        except ValueError as e:
            AppException().raise_400(str(e))
        return LoanEstimateResponse(
            price=data.price,
            **terms,
            principal=breakdown.principal,
            installment=breakdown.installment,
            total_payment=breakdown.total_payment,
            total_interest=breakdown.total_interest,
        )

    def schedule(self, data: LoanEstimateRequest) -> LoanScheduleResponse:
        estimate = self.estimate(data)
        rows = amortization.amortization_schedule(
            data.price,
            estimate.down_payment,
            estimate.annual_rate_percent,
            estimate.tenure_months,
        )
        return LoanScheduleResponse(
            **estimate.model_dump(),
            schedule=[ScheduleRowResponse.model_validate(row) for row in rows],
        )
