from __future__ import annotations

from lexdesk.models.enums import IdentityRole


def test_client_reads_own_profile(api, seed, auth_headers):
    response = api.get("/api/client/profile", headers=auth_headers(seed.client.id, IdentityRole.CLIENT))
    assert response.status_code == 200
    body = response.json()
    assert body["id"] == seed.client.id
    assert body["company"] == "Northwind Pty Ltd"
    assert body["account_type"] == "Business"


def test_lawyer_has_no_client_profile(api, seed, auth_headers):
    response = api.get("/api/client/profile", headers=auth_headers(seed.lawyer.id))
    assert response.status_code == 403


def test_client_updates_allow_listed_fields(api, seed, auth_headers):
    response = api.put(
        "/api/client/profile",
        json={"company": "Northwind Holdings", "account_type": "Corporate", "is_active": False},
        headers=auth_headers(seed.client.id, IdentityRole.CLIENT),
    )
    assert response.status_code == 200, response.text
    body = response.json()
    assert body["company"] == "Northwind Holdings"
    assert body["account_type"] == "Corporate"
    assert seed.client.is_active is True


def test_profile_email_must_be_unique(api, seed, auth_headers):
    response = api.put(
        "/api/client/profile",
        json={"email": seed.other_client.email},
        headers=auth_headers(seed.client.id, IdentityRole.CLIENT),
    )
    assert response.status_code == 409


def test_profile_email_must_be_valid(api, seed, auth_headers):
    response = api.put(
        "/api/client/profile",
        json={"email": "not-an-email"},
        headers=auth_headers(seed.client.id, IdentityRole.CLIENT),
    )
    assert response.status_code == 422
