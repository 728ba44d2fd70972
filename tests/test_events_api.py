from __future__ import annotations

from lexdesk.models.enums import IdentityRole


def _event_payload(**overrides):
    payload = {
        "title": "Directions hearing",
        "event_type": "Hearing",
        "event_date": "2026-03-12",
        "start_time": "09:30",
        "end_time": "10:15",
        "location": "Federal Court, Court 4",
        "priority": "High",
    }
    payload.update(overrides)
    return payload


def _create_event(api, headers, **overrides):
    response = api.post("/api/events", json=_event_payload(**overrides), headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_event_with_case_and_attendees(api, seed, auth_headers):
    created = _create_event(
        api,
        auth_headers(seed.lawyer.id),
        case_id=seed.open_case.id,
        attendee_ids=[seed.assignee.id],
    )
    assert created["creator_id"] == seed.lawyer.id
    assert created["case"] == {"id": seed.open_case.id, "case_number": "NW-001", "case_name": "Northwind v Contoso"}
    assert [(p["first_name"], p["last_name"]) for p in created["attendees"]] == [("Riley", "Quinn")]
    assert created["start_time"] == "09:30:00"


def test_event_without_case(api, seed, auth_headers):
    created = _create_event(api, auth_headers(seed.lawyer.id), event_type="Meeting")
    assert created["case_id"] is None
    assert created["case"] is None
    assert created["attendees"] == []


def test_unknown_attendee_is_bad_request(api, seed, auth_headers):
    response = api.post("/api/events", json=_event_payload(attendee_ids=[999]), headers=auth_headers(seed.lawyer.id))
    assert response.status_code == 400
    assert response.json()["detail"] == "Person '999' does not exist"


def test_case_must_belong_to_caller(api, seed, auth_headers):
    response = api.post(
        "/api/events",
        json=_event_payload(case_id=seed.other_case.id),
        headers=auth_headers(seed.lawyer.id),
    )
    assert response.status_code == 400


def test_event_cannot_end_before_it_starts(api, seed, auth_headers):
    response = api.post(
        "/api/events",
        json=_event_payload(start_time="14:00", end_time="13:00"),
        headers=auth_headers(seed.lawyer.id),
    )
    assert response.status_code == 422


def test_events_are_private_to_their_creator(api, seed, auth_headers):
    created = _create_event(api, auth_headers(seed.lawyer.id))
    other = auth_headers(seed.other_lawyer.id)

    assert api.get("/api/events", headers=other).json() == []
    assert api.get(f"/api/events/{created['id']}", headers=other).status_code == 404
    assert api.delete(f"/api/events/{created['id']}", headers=other).status_code == 404


def test_clients_have_no_calendar_access(api, seed, auth_headers):
    response = api.get("/api/events", headers=auth_headers(seed.client.id, IdentityRole.CLIENT))
    assert response.status_code == 403


def test_list_is_ordered_by_date_then_start(api, seed, auth_headers):
    headers = auth_headers(seed.lawyer.id)
    later = _create_event(api, headers, event_date="2026-04-01")
    afternoon = _create_event(api, headers, start_time="15:00", end_time="16:00")
    morning = _create_event(api, headers, start_time="08:00", end_time="08:30")

    rows = api.get("/api/events", headers=headers).json()
    assert [row["id"] for row in rows] == [morning["id"], afternoon["id"], later["id"]]


def test_update_event(api, seed, auth_headers, clock):
    headers = auth_headers(seed.lawyer.id)
    created = _create_event(api, headers, case_id=seed.open_case.id)
    clock.advance(hours=1)

    response = api.patch(
        f"/api/events/{created['id']}",
        json={"case_id": seed.closed_case.id, "attendee_ids": [seed.assignee.id], "creator_id": 999},
        headers=headers,
    )
    assert response.status_code == 200, response.text
    body = response.json()
    assert body["case"]["id"] == seed.closed_case.id
    assert [p["id"] for p in body["attendees"]] == [seed.assignee.id]
    assert body["creator_id"] == seed.lawyer.id
    assert body["updated_at"] != created["updated_at"]


def test_partial_update_keeps_times_consistent(api, seed, auth_headers):
    headers = auth_headers(seed.lawyer.id)
    created = _create_event(api, headers)
    response = api.put(f"/api/events/{created['id']}", json={"end_time": "09:00"}, headers=headers)
    assert response.status_code == 422


def test_required_event_fields_cannot_be_cleared(api, seed, auth_headers):
    headers = auth_headers(seed.lawyer.id)
    created = _create_event(api, headers)
    response = api.put(f"/api/events/{created['id']}", json={"title": None}, headers=headers)
    assert response.status_code == 422


def test_delete_event(api, seed, auth_headers):
    headers = auth_headers(seed.lawyer.id)
    created = _create_event(api, headers)
    response = api.delete(f"/api/events/{created['id']}", headers=headers)
    assert response.json() == {"message": "Event deleted"}
    assert api.get(f"/api/events/{created['id']}", headers=headers).status_code == 404


def test_deleting_a_case_keeps_its_events(api, seed, auth_headers):
    headers = auth_headers(seed.lawyer.id)
    created = _create_event(api, headers, case_id=seed.closed_case.id)

    assert api.delete(f"/api/cases/{seed.closed_case.id}", headers=headers).status_code == 200
    body = api.get(f"/api/events/{created['id']}", headers=headers).json()
    assert body["case_id"] is None
    assert body["case"] is None
