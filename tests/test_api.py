"""
HTTP tests for the v1 API.

Exercise routing, authentication, request parsing and the translation
of service errors into status codes and JSON error bodies.
"""

from conftest import PASSWORD, add_place, auth_headers


PLAN_BODY = {
    "destination_id": 5,
    "started_at": "2024-06-01T09:00:00",
    "ended_at": "2024-06-03T18:00:00",
    "vehicle": "OWN_CAR",
}


def create_plan(client, member, **overrides):
    response = client.post("/api/v1/plans", json={**PLAN_BODY, **overrides}, headers=auth_headers(member))
    assert response.status_code == 201, response.text
    return response.json()


def test_register_login_and_me(client):
    response = client.post(
        "/api/v1/members", json={"login_id": "newbie", "name": "New Member", "password": PASSWORD}
    )
    assert response.status_code == 201
    member_id = response.json()["id"]

    duplicate = client.post(
        "/api/v1/members", json={"login_id": "newbie", "name": "Again", "password": PASSWORD}
    )
    assert duplicate.status_code == 409
    assert duplicate.json()["error"]["code"] == "conflict"

    bad_login = client.post("/api/v1/members/login", json={"login_id": "newbie", "password": "nope-nope"})
    assert bad_login.status_code == 401

    login = client.post("/api/v1/members/login", json={"login_id": "newbie", "password": PASSWORD})
    assert login.status_code == 200
    token = login.json()["access_token"]

    me = client.get("/api/v1/members/me", headers={"Authorization": f"Bearer {token}"})
    assert me.json() == {"id": member_id, "login_id": "newbie", "name": "New Member"}


def test_requests_without_valid_token_are_rejected(client):
    assert client.get("/api/v1/plans/all").status_code == 401
    assert client.get("/api/v1/plans/all", headers={"Authorization": "Bearer not.a.token"}).status_code == 401


def test_list_destinations(client, member):
    response = client.get("/api/v1/plans", headers=auth_headers(member))

    assert response.status_code == 200
    assert {"id": 5, "destination_name": "JEJU"} in response.json()


def test_create_and_get_plan(client, member):
    created = create_plan(client, member)

    assert created["destination_name"] == "JEJU"
    assert created["vehicle"] == "OWN_CAR"

    detail = client.get(f"/api/v1/plans/{created['id']}", headers=auth_headers(member)).json()
    assert detail["started_at"] == "2024-06-01T09:00:00"
    assert [m["login_id"] for m in detail["members"]] == [member.login_id]


def test_create_plan_validation(client, member):
    bad_dates = client.post(
        "/api/v1/plans",
        json={**PLAN_BODY, "started_at": "2024-06-04T09:00:00"},
        headers=auth_headers(member),
    )
    assert bad_dates.status_code == 400
    assert bad_dates.json()["error"]["code"] == "invalid_argument"

    unknown_destination = client.post(
        "/api/v1/plans", json={**PLAN_BODY, "destination_id": 999}, headers=auth_headers(member)
    )
    assert unknown_destination.status_code == 404

    bad_vehicle = client.post(
        "/api/v1/plans", json={**PLAN_BODY, "vehicle": "BICYCLE"}, headers=auth_headers(member)
    )
    assert bad_vehicle.status_code == 422


def test_offset_timestamps_are_stored_as_trip_local_time(client, member):
    created = create_plan(
        client, member, started_at="2024-06-01T00:00:00Z", ended_at="2024-06-03T09:00:00Z"
    )

    # Asia/Seoul is UTC+9.
    assert created["started_at"] == "2024-06-01T09:00:00"
    assert created["ended_at"] == "2024-06-03T18:00:00"


def test_non_member_gets_same_404_as_missing_plan(client, member, other_member):
    created = create_plan(client, member)

    foreign = client.get(f"/api/v1/plans/{created['id']}", headers=auth_headers(other_member))
    missing = client.get("/api/v1/plans/9999", headers=auth_headers(other_member))

    assert foreign.status_code == missing.status_code == 404
    assert foreign.json()["error"]["code"] == missing.json()["error"]["code"] == "not_found"
    assert client.delete(f"/api/v1/plans/{created['id']}", headers=auth_headers(other_member)).status_code == 404
    assert client.put(
        f"/api/v1/plans/{created['id']}", json=PLAN_BODY, headers=auth_headers(other_member)
    ).status_code == 404


def test_ids_beyond_sqlite_integer_range_are_rejected(client, member):
    created = create_plan(client, member)
    headers = auth_headers(member)
    too_big = "99999999999999999999"

    assert client.get(f"/api/v1/plans/{too_big}", headers=headers).status_code == 422
    assert client.delete(f"/api/v1/plans/{too_big}", headers=headers).status_code == 422
    assert client.get(f"/api/v1/plans/{too_big}/places", headers=headers).status_code == 422
    assert client.get(f"/api/v1/plans/{too_big}/members", headers=headers).status_code == 422
    assert client.delete(
        f"/api/v1/plans/{created['id']}/places/{too_big}", headers=headers
    ).status_code == 422
    assert client.put(
        f"/api/v1/plans/{created['id']}/destination", params={"new_destination_id": too_big}, headers=headers
    ).status_code == 422
    assert client.post(
        "/api/v1/plans", json={**PLAN_BODY, "destination_id": int(too_big)}, headers=headers
    ).status_code == 422
    assert client.get("/api/v1/plans/0", headers=headers).status_code == 422


def test_list_routes(client, member, other_member):
    june = create_plan(client, member)
    august = create_plan(client, member, started_at="2024-08-01T09:00:00", ended_at="2024-08-02T18:00:00")
    busan = create_plan(client, member, destination_id=2, started_at="2024-07-01T09:00:00",
                        ended_at="2024-07-02T18:00:00")
    create_plan(client, other_member)
    headers = auth_headers(member)

    all_plans = client.get("/api/v1/plans/all", headers=headers).json()
    assert sorted(p["id"] for p in all_plans) == sorted([june["id"], august["id"], busan["id"]])

    newest_first = client.get("/api/v1/plans/sorted", headers=headers).json()
    assert [p["id"] for p in newest_first] == [august["id"], busan["id"], june["id"]]

    jeju = client.get("/api/v1/plans/sorted/JEJU", headers=headers).json()
    assert [p["id"] for p in jeju] == [august["id"], june["id"]]

    in_range = client.get(
        "/api/v1/plans/sorted/JEJU/2024-05-01T00:00:00/2024-06-30T00:00:00", headers=headers
    ).json()
    assert [p["id"] for p in in_range] == [june["id"]]

    assert client.get("/api/v1/plans/sorted/ATLANTIS", headers=headers).status_code == 422


def test_partial_updates(client, member):
    created = create_plan(client, member)
    late = add_place(created["id"], "Late dinner")
    headers = auth_headers(member)
    base = f"/api/v1/plans/{created['id']}"

    too_late = client.put(f"{base}/start-time", params={"new_start_time": "2024-06-04T00:00:00"}, headers=headers)
    assert too_late.status_code == 400

    end = client.put(f"{base}/end-time", params={"new_end_time": "2024-06-05T00:00:00"}, headers=headers)
    assert end.status_code == 200
    assert end.json()["ended_at"] == "2024-06-05T00:00:00"

    destination = client.put(f"{base}/destination", params={"new_destination_id": 2}, headers=headers)
    assert destination.json()["destination_name"] == "BUSAN"

    vehicle = client.put(f"{base}/vehicle", params={"new_vehicle": "PUBLIC_TRANSPORTATION"}, headers=headers)
    assert vehicle.json()["vehicle"] == "PUBLIC_TRANSPORTATION"

    detail = client.get(base, headers=headers).json()
    assert detail["places"][0]["id"] == late.id


def test_full_update_resets_places(client, member):
    created = create_plan(client, member)
    headers = auth_headers(member)
    place = client.post(
        f"/api/v1/plans/{created['id']}/places",
        json={"name": "Seongsan", "started_at": "2024-06-01T10:00:00", "ended_at": "2024-06-01T12:00:00"},
        headers=headers,
    ).json()

    response = client.put(
        f"/api/v1/plans/{created['id']}",
        json={**PLAN_BODY, "started_at": "2024-06-02T09:00:00", "ended_at": "2024-06-04T18:00:00"},
        headers=headers,
    )

    assert response.status_code == 200
    places = client.get(f"/api/v1/plans/{created['id']}/places", headers=headers).json()
    assert places == [{**place, "started_at": None, "ended_at": None}]


def test_delete_is_soft_and_final(client, member):
    created = create_plan(client, member)
    headers = auth_headers(member)

    assert client.delete(f"/api/v1/plans/{created['id']}", headers=headers).status_code == 204
    assert client.get(f"/api/v1/plans/{created['id']}", headers=headers).status_code == 404
    assert client.delete(f"/api/v1/plans/{created['id']}", headers=headers).status_code == 404
    assert client.get("/api/v1/plans/all", headers=headers).json() == []


def test_finalize_without_calendar_still_succeeds(client, member):
    created = create_plan(client, member)

    response = client.post(f"/api/v1/plans/{created['id']}/finalize", headers=auth_headers(member))

    assert response.status_code == 200
    body = response.json()
    assert body["finalized"] is True
    assert body["calendar_event_created"] is False
    assert body["warning"]


def test_place_routes(client, member):
    created = create_plan(client, member)
    headers = auth_headers(member)
    places_url = f"/api/v1/plans/{created['id']}/places"

    outside = client.post(
        places_url,
        json={"name": "Too early", "started_at": "2024-05-31T10:00:00", "ended_at": "2024-05-31T12:00:00"},
        headers=headers,
    )
    assert outside.status_code == 400

    place = client.post(places_url, json={"name": "Beach"}, headers=headers).json()
    window = client.put(
        f"{places_url}/{place['id']}/visit-time",
        json={"started_at": "2024-06-02T13:00:00", "ended_at": "2024-06-02T15:00:00"},
        headers=headers,
    )
    assert window.json()["started_at"] == "2024-06-02T13:00:00"

    cleared = client.delete(f"{places_url}/{place['id']}/visit-time", headers=headers)
    assert cleared.json()["started_at"] is None

    assert client.delete(f"{places_url}/{place['id']}", headers=headers).status_code == 204
    assert client.get(places_url, headers=headers).json() == []


def test_member_routes(client, member, other_member):
    created = create_plan(client, member)
    members_url = f"/api/v1/plans/{created['id']}/members"

    invited = client.post(members_url, json={"login_id": other_member.login_id}, headers=auth_headers(member))
    assert invited.status_code == 201

    assert client.get(f"/api/v1/plans/{created['id']}", headers=auth_headers(other_member)).status_code == 200

    left = client.delete(f"{members_url}/me", headers=auth_headers(other_member))
    assert left.status_code == 204
    assert client.get(f"/api/v1/plans/{created['id']}", headers=auth_headers(other_member)).status_code == 404

    last = client.delete(f"{members_url}/me", headers=auth_headers(member))
    assert last.status_code == 400


def test_audit_trail(client, member):
    created = create_plan(client, member)
    client.delete(f"/api/v1/plans/{created['id']}", headers=auth_headers(member))

    logs = client.get("/api/v1/audit/me", headers=auth_headers(member)).json()

    assert [(log["action"], log["object_id"]) for log in logs] == [
        ("delete", created["id"]),
        ("create", created["id"]),
    ]
