from unittest.mock import AsyncMock, patch

INQUIRIES = "/api/v1/inquiries"


def inquiry_payload(**overrides):
    payload = {
        "owner_name": "Ravi Kumar",
        "phone": "9876543210",
        "brand": "Toyota",
        "model": "Innova",
        "year": 2017,
        "km_driven": 90000,
        "fuel_type": "Diesel",
        "transmission": "Manual",
        "expected_price": 1100000,
    }
    payload.update(overrides)
    return payload


async def test_public_submit_defaults_to_pending(client):
    with patch("dealership.api.v1.inquiries.router.send_inquiry_alert", new=AsyncMock(return_value=True)) as alert:
        resp = await client.post(INQUIRIES, json=inquiry_payload())

    assert resp.status_code == 201
    assert resp.json()["status"] == "pending"
    assert resp.json()["transmission"] == "Manual"
    alert.assert_awaited_once()


async def test_submit_validates_enums(client):
    resp = await client.post(INQUIRIES, json=inquiry_payload(transmission="CVT"))

    assert resp.status_code == 422


async def test_list_requires_admin(client, user_headers):
    assert (await client.get(INQUIRIES)).status_code == 401
    assert (await client.get(INQUIRIES, headers=user_headers)).status_code == 403


async def test_admin_workflow(client, admin_headers):
    created = (await client.post(INQUIRIES, json=inquiry_payload())).json()
    await client.post(INQUIRIES, json=inquiry_payload(brand="Kia", model="Seltos"))

    listed = await client.get(INQUIRIES, headers=admin_headers)
    assert len(listed.json()) == 2

    updated = await client.patch(
        f"{INQUIRIES}/{created['id']}",
        json={"status": "contacted", "admin_notes": "Called, visiting Saturday"},
        headers=admin_headers,
    )
    assert updated.json()["status"] == "contacted"
    assert updated.json()["admin_notes"] == "Called, visiting Saturday"

    pending = await client.get(INQUIRIES, params={"status": "pending"}, headers=admin_headers)
    assert [i["model"] for i in pending.json()] == ["Seltos"]

    deleted = await client.delete(f"{INQUIRIES}/{created['id']}", headers=admin_headers)
    assert deleted.status_code == 204
    assert len((await client.get(INQUIRIES, headers=admin_headers)).json()) == 1


async def test_update_unknown_inquiry(client, admin_headers):
    resp = await client.patch(
        f"{INQUIRIES}/00000000-0000-0000-0000-000000000000",
        json={"status": "closed"},
        headers=admin_headers,
    )

    assert resp.status_code == 404


async def test_alert_skipped_without_mail_config():
    from types import SimpleNamespace

    from dealership.core.email import send_inquiry_alert

    inquiry = SimpleNamespace(
        owner_name="A", phone="1", whatsapp=None, brand="B", model="C",
        year=None, km_driven=None, expected_price=None, description=None,
    )
    with patch("dealership.core.email.aiosmtplib.send", new=AsyncMock()) as send:
        assert await send_inquiry_alert(inquiry) is False
    send.assert_not_awaited()


async def test_alert_escapes_submitted_markup(client, monkeypatch):
    from dealership.core import email

    monkeypatch.setattr(email.settings, "INQUIRY_ALERT_EMAIL", "sales@example.com")
    monkeypatch.setattr(email.settings, "MAIL_SERVER", "smtp.example.com")
    monkeypatch.setattr(email.settings, "MAIL_FROM", "noreply@example.com")
    payload = inquiry_payload(
        owner_name='<a href="http://evil">click</a>',
        model="<b>Innova</b>",
        description="<script>alert(1)</script>",
    )

    with patch("dealership.core.email.aiosmtplib.send", new=AsyncMock()) as send:
        resp = await client.post(INQUIRIES, json=payload)

    assert resp.status_code == 201
    send.assert_awaited_once()
    message = send.await_args.args[0]
    body = message.get_payload()[0].get_payload(decode=True).decode()
    assert "&lt;a href=" in body
    assert "<a href" not in body
    assert "&lt;b&gt;Innova&lt;/b&gt;" in body
    assert "<script>" not in body
