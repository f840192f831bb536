from typing import List, Optional

from pydantic import BaseModel, Field


class LoanEstimateRequest(BaseModel):
    price: float = Field(..., ge=0, allow_inf_nan=False, description="Vehicle price")
    down_payment: Optional[float] = Field(None, ge=0, allow_inf_nan=False, description="Defaults to 20% of price")
    annual_rate_percent: Optional[float] = Field(None, ge=0, le=100, allow_inf_nan=False, description="Defaults to 9.5")
    tenure_months: Optional[int] = Field(None, ge=1, le=600, description="Defaults to 36")


class LoanEstimateResponse(BaseModel):
    price: float
    down_payment: float
    annual_rate_percent: float
    tenure_months: int
    principal: float
    installment: float
    total_payment: float
    total_interest: float


class ScheduleRowResponse(BaseModel):
    month: int
    installment: float
    principal_component: float
    interest_component: float
    balance: float

    class Config:
        from_attributes = True


class LoanScheduleResponse(LoanEstimateResponse):
    schedule: List[ScheduleRowResponse]
