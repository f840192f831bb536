"""EMI (equated monthly installment) helpers for the car detail loan calculator.

Reducing-balance amortization with a fixed monthly rate:
    EMI = P * r * (1 + r)^n / ((1 + r)^n - 1),  r = annual_rate_percent / 12 / 100
"""
from dataclasses import dataclass

DEFAULT_DOWN_PAYMENT_RATIO = 0.2
DEFAULT_ANNUAL_RATE_PERCENT = 9.5
DEFAULT_TENURE_MONTHS = 36

MIN_ANNUAL_RATE_PERCENT = 5.0
MAX_ANNUAL_RATE_PERCENT = 18.0
MIN_TENURE_MONTHS = 6
MAX_TENURE_MONTHS = 84


@dataclass(frozen=True)
class EmiBreakdown:
    principal: float
    installment: float
    total_payment: float
    total_interest: float


@dataclass(frozen=True)
class ScheduleRow:
    month: int
    installment: float
    principal_component: float
    interest_component: float
    balance: float


def _validate(price: float, down_payment: float, annual_rate_percent: float, tenure_months: int) -> None:
    if tenure_months < 1:
        raise ValueError("tenure_months must be at least 1")
    if price < 0:
        raise ValueError("price cannot be negative")
    if down_payment < 0:
        raise ValueError("down_payment cannot be negative")
    if annual_rate_percent < 0:
        raise ValueError("annual_rate_percent cannot be negative")


def monthly_rate(annual_rate_percent: float) -> float:
    return annual_rate_percent / 12 / 100


def compute(
    price: float,
    down_payment: float,
    annual_rate_percent: float,
    tenure_months: int,
) -> EmiBreakdown:
    """
    Fixed monthly installment for financing ``price - down_payment``.

    A down payment covering the whole price means no loan: every figure is 0.
    Raises ValueError for a tenure below one month or negative inputs.
    """
    _validate(price, down_payment, annual_rate_percent, tenure_months)
    principal = price - down_payment
    if principal <= 0:
        return EmiBreakdown(principal=0.0, installment=0.0, total_payment=0.0, total_interest=0.0)

    r = monthly_rate(annual_rate_percent)
    if r == 0:
        installment = principal / tenure_months
    else:
        growth = (1 + r) ** tenure_months
        installment = principal * r * growth / (growth - 1)

    total_payment = installment * tenure_months
    return EmiBreakdown(
        principal=float(principal),
        installment=float(installment),
        total_payment=float(total_payment),
        total_interest=float(total_payment - principal),
    )


def amortization_schedule(
    price: float,
    down_payment: float,
    annual_rate_percent: float,
    tenure_months: int,
) -> list[ScheduleRow]:
    """Month-by-month split of each installment into interest and principal. Empty when nothing is financed."""
    breakdown = compute(price, down_payment, annual_rate_percent, tenure_months)
    if breakdown.principal <= 0:
        return []

    r = monthly_rate(annual_rate_percent)
    balance = breakdown.principal
    rows: list[ScheduleRow] = []
    for month in range(1, tenure_months + 1):
        interest = balance * r
        principal_part = breakdown.installment - interest
        if month == tenure_months:
            # last row absorbs floating point drift
            principal_part = balance
        balance = balance - principal_part
        rows.append(
            ScheduleRow(
                month=month,
                installment=principal_part + interest,
                principal_component=principal_part,
                interest_component=interest,
                balance=max(0.0, balance),
            )
        )
    return rows


def clamp_down_payment(price: float, down_payment: float) -> float:
    """Keep a down payment within [0, price], as the calculator slider does."""
    return min(max(0.0, float(down_payment)), float(max(0, price)))


def default_terms(price: float) -> dict:
    """Initial calculator state for a listing: 20% down, 9.5% p.a., 36 months."""
    return {
        "down_payment": float(round(price * DEFAULT_DOWN_PAYMENT_RATIO)),
        "annual_rate_percent": DEFAULT_ANNUAL_RATE_PERCENT,
        "tenure_months": DEFAULT_TENURE_MONTHS,
    }
