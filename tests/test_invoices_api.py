from __future__ import annotations

from decimal import Decimal

from lexdesk.core.security import create_access_token
from lexdesk.models.enums import IdentityRole

EXPENSES = [
    {"description": "Counsel fees", "cost": "100.00", "quantity": 2, "billable": True},
    {"description": "Courier", "cost": "50.00", "quantity": 1, "billable": False},
]


def _create_invoice(api, headers, case_id, expenses=EXPENSES):
    response = api.post("/api/invoices", json={"case_id": case_id, "expenses": expenses}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_invoice_computes_totals(api, seed, auth_headers, clock):
    created = _create_invoice(api, auth_headers(seed.lawyer.id), seed.open_case.id)

    assert created["status"] == "Draft"
    assert Decimal(created["subtotal"]) == Decimal("200.00")
    assert Decimal(created["tax"]) == Decimal("20.00")
    assert Decimal(created["total"]) == Decimal("220.00")
    assert created["issue_date"] == clock.now.date().isoformat()
    assert created["case_name"] == "Northwind v Contoso"
    assert created["owner_id"] == seed.lawyer.id
    assert created["owner_name"] == "Avery Stone"
    assert [e["description"] for e in created["expenses"]] == ["Counsel fees", "Courier"]


def test_create_invoice_requires_token(api, seed):
    response = api.post("/api/invoices", json={"case_id": seed.open_case.id, "expenses": EXPENSES})
    assert response.status_code == 401


def test_create_invoice_rejects_unknown_role(api, seed):
    token = create_access_token({"sub": str(seed.lawyer.id), "role": "admin"})
    response = api.get("/api/invoices", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_inactive_account_is_rejected(api, db, seed, auth_headers):
    seed.lawyer.is_active = False
    db.commit()
    response = api.get("/api/invoices", headers=auth_headers(seed.lawyer.id))
    assert response.status_code == 401


def test_client_cannot_create_invoice(api, seed, auth_headers):
    response = api.post(
        "/api/invoices",
        json={"case_id": seed.open_case.id, "expenses": EXPENSES},
        headers=auth_headers(seed.client.id, IdentityRole.CLIENT),
    )
    assert response.status_code == 403


def test_create_invoice_for_missing_case_is_bad_request(api, seed, auth_headers):
    response = api.post(
        "/api/invoices",
        json={"case_id": 9999, "expenses": EXPENSES},
        headers=auth_headers(seed.lawyer.id),
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Case '9999' does not exist"


def test_negative_cost_is_rejected(api, seed, auth_headers):
    response = api.post(
        "/api/invoices",
        json={"case_id": seed.open_case.id, "expenses": [{"description": "Refund", "cost": "-1.00", "quantity": 1}]},
        headers=auth_headers(seed.lawyer.id),
    )
    assert response.status_code == 422


def test_client_has_no_invoice_access(api, seed, auth_headers):
    headers = auth_headers(seed.client.id, IdentityRole.CLIENT)
    for path in ("/api/invoices", "/api/invoices/stats", "/api/invoices/recent-activity"):
        response = api.get(path, headers=headers)
        assert response.status_code == 403, path
        assert response.json()["detail"] == "Clients cannot view invoices"


def test_lawyers_only_see_invoices_they_issued(api, seed, auth_headers):
    created = _create_invoice(api, auth_headers(seed.lawyer.id), seed.open_case.id)
    other = auth_headers(seed.other_lawyer.id)

    assert api.get("/api/invoices", headers=other).json() == []
    assert api.get(f"/api/invoices/{created['id']}", headers=other).status_code == 404
    assert api.patch(f"/api/invoices/{created['id']}", json={"notes": "x"}, headers=other).status_code == 404
    assert api.delete(f"/api/invoices/{created['id']}", headers=other).status_code == 404


def test_invoice_on_someone_elses_case_stays_with_its_issuer(api, seed, auth_headers):
    created = _create_invoice(api, auth_headers(seed.other_lawyer.id), seed.open_case.id)

    owner_view = api.get("/api/invoices", headers=auth_headers(seed.lawyer.id)).json()
    issuer_view = api.get("/api/invoices", headers=auth_headers(seed.other_lawyer.id)).json()
    assert owner_view == []
    assert [row["id"] for row in issuer_view] == [created["id"]]


def test_status_patch_keeps_totals(api, seed, auth_headers, clock):
    headers = auth_headers(seed.lawyer.id)
    created = _create_invoice(api, headers, seed.open_case.id)
    clock.advance(hours=3)

    response = api.patch(f"/api/invoices/{created['id']}", json={"status": "Outstanding"}, headers=headers)
    assert response.status_code == 200, response.text
    body = response.json()
    assert body["status"] == "Outstanding"
    assert body["total"] == created["total"]
    assert body["updated_at"] != created["updated_at"]


def test_put_replaces_expenses_and_ignores_unknown_fields(api, seed, auth_headers):
    headers = auth_headers(seed.lawyer.id)
    created = _create_invoice(api, headers, seed.open_case.id)

    response = api.put(
        f"/api/invoices/{created['id']}",
        json={
            "expenses": [{"description": "Hearing", "cost": "300.00", "quantity": 1}],
            "payment_terms": "Net 30",
            "owner_id": seed.other_lawyer.id,
            "total": "1.00",
        },
        headers=headers,
    )
    assert response.status_code == 200, response.text
    body = response.json()
    assert Decimal(body["total"]) == Decimal("330.00")
    assert body["payment_terms"] == "Net 30"
    assert body["owner_id"] == seed.lawyer.id


def test_paid_to_draft_is_rejected(api, seed, auth_headers):
    headers = auth_headers(seed.lawyer.id)
    created = _create_invoice(api, headers, seed.open_case.id)
    assert api.patch(f"/api/invoices/{created['id']}", json={"status": "Paid"}, headers=headers).status_code == 200

    response = api.patch(f"/api/invoices/{created['id']}", json={"status": "Draft"}, headers=headers)
    assert response.status_code == 422
    assert response.json()["detail"] == "Invoice cannot move from Paid to Draft"


def test_unknown_status_is_rejected(api, seed, auth_headers):
    headers = auth_headers(seed.lawyer.id)
    created = _create_invoice(api, headers, seed.open_case.id)
    response = api.patch(f"/api/invoices/{created['id']}", json={"status": "Cancelled"}, headers=headers)
    assert response.status_code == 422


def test_delete_invoice(api, seed, auth_headers):
    headers = auth_headers(seed.lawyer.id)
    created = _create_invoice(api, headers, seed.open_case.id)

    response = api.delete(f"/api/invoices/{created['id']}", headers=headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Invoice deleted"}
    assert api.get(f"/api/invoices/{created['id']}", headers=headers).status_code == 404
    assert api.delete(f"/api/invoices/{created['id']}", headers=headers).status_code == 404


def test_stats_and_recent_activity(api, seed, auth_headers, clock):
    headers = auth_headers(seed.lawyer.id)
    paid = _create_invoice(api, headers, seed.open_case.id, [{"description": "A", "cost": "100.00", "quantity": 1}])
    clock.advance(minutes=1)
    outstanding = _create_invoice(
        api, headers, seed.open_case.id, [{"description": "B", "cost": "200.00", "quantity": 1}]
    )
    clock.advance(minutes=1)
    draft = _create_invoice(api, headers, seed.open_case.id, [{"description": "C", "cost": "50.00", "quantity": 1}])
    api.patch(f"/api/invoices/{paid['id']}", json={"status": "Paid"}, headers=headers)
    api.patch(f"/api/invoices/{outstanding['id']}", json={"status": "Outstanding"}, headers=headers)

    stats = api.get("/api/invoices/stats", headers=headers).json()
    assert Decimal(stats["total_invoiced"]) == Decimal("385.00")
    assert Decimal(stats["total_paid"]) == Decimal("110.00")
    assert Decimal(stats["total_outstanding"]) == Decimal("220.00")
    assert stats["by_status"]["Draft"]["count"] == 1

    activity = api.get("/api/invoices/recent-activity", params={"limit": 2}, headers=headers).json()
    assert [row["id"] for row in activity] == [draft["id"], outstanding["id"]]
    assert activity[1]["action"] == "Outstanding"


def test_stats_for_empty_scope(api, seed, auth_headers):
    stats = api.get("/api/invoices/stats", headers=auth_headers(seed.other_lawyer.id)).json()
    assert Decimal(stats["total_invoiced"]) == Decimal("0")
    assert stats["by_status"] == {}


def test_recent_activity_limit_is_bounded(api, seed, auth_headers):
    response = api.get("/api/invoices/recent-activity", params={"limit": 0}, headers=auth_headers(seed.lawyer.id))
    assert response.status_code == 422


def test_health_and_metrics(api, seed, auth_headers):
    _create_invoice(api, auth_headers(seed.lawyer.id), seed.open_case.id)

    assert api.get("/healthz").json() == {"status": "ok", "database": "ok"}
    metrics = api.get("/metrics")
    assert metrics.status_code == 200
    assert "lexdesk_invoice_events_total" in metrics.text
