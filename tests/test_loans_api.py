import pytest

LOANS = "/api/v1/loans"


async def test_estimate_reference_loan(client):
    resp = await client.post(
        f"{LOANS}/estimate",
        json={"price": 500000, "down_payment": 100000, "annual_rate_percent": 9.5, "tenure_months": 36},
    )
    body = resp.json()

    assert resp.status_code == 200
    assert body["principal"] == 400000
    assert body["installment"] == pytest.approx(12813, rel=1e-3)
    assert body["total_interest"] == pytest.approx(body["total_payment"] - 400000)


async def test_estimate_uses_calculator_defaults(client):
    resp = await client.post(f"{LOANS}/estimate", json={"price": 1000000})
    body = resp.json()

    assert body["down_payment"] == 200000
    assert body["annual_rate_percent"] == 9.5
    assert body["tenure_months"] == 36


async def test_estimate_down_payment_over_price(client):
    resp = await client.post(f"{LOANS}/estimate", json={"price": 300000, "down_payment": 400000})

    assert resp.status_code == 200
    assert resp.json()["installment"] == 0


@pytest.mark.parametrize(
    "payload",
    [
        {"price": 500000, "tenure_months": 0},
        {"price": -1},
        {"price": 500000, "annual_rate_percent": -2},
    ],
)
async def test_estimate_rejects_out_of_range(client, payload):
    resp = await client.post(f"{LOANS}/estimate", json=payload)

    assert resp.status_code == 422


async def test_schedule(client):
    resp = await client.post(
        f"{LOANS}/schedule",
        json={"price": 240000, "down_payment": 0, "annual_rate_percent": 0, "tenure_months": 12},
    )
    body = resp.json()

    assert resp.status_code == 200
    assert len(body["schedule"]) == 12
    assert all(row["installment"] == pytest.approx(20000) for row in body["schedule"])
    assert body["schedule"][-1]["balance"] == pytest.approx(0, abs=1e-6)


@pytest.mark.parametrize(
    "raw_body",
    [
        '{"price": Infinity}',
        '{"price": 500000, "down_payment": Infinity}',
        '{"price": 500000, "annual_rate_percent": NaN}',
    ],
)
async def test_estimate_rejects_non_finite_numbers(client, raw_body):
    resp = await client.post(
        f"{LOANS}/estimate",
        content=raw_body,
        headers={"Content-Type": "application/json"},
    )

    assert resp.status_code == 422
