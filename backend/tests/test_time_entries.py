from datetime import timedelta

from conftest import TODAY, add_entry


def test_create_time_entry_normalizes_date_and_ids(client, employee, projects):
    payload = {
        "date": "2025-01-15T09:30:00.000Z",
        "hours": "3.5",
        "description": "API integration",
        "employeeId": employee.id,
        "projectId": str(projects[1].id),
    }

    response = client.post("/api/time-entries", json=payload)

    assert response.status_code == 201
    created = response.json()
    assert created["date"] == "2025-01-15"
    assert created["hours"] == 3.5
    assert created["projectId"] == projects[1].id
    assert created["project"]["name"] == "Mobile App"
    assert created["createdAt"]


def test_create_time_entry_defaults_to_current_employee(client, employee, projects):
    response = client.post(
        "/api/time-entries",
        json={"date": "2025-01-14", "hours": 2, "description": "Fixes", "projectId": projects[0].id},
    )

    assert response.status_code == 201
    assert response.json()["employeeId"] == employee.id


def test_create_time_entry_rejects_invalid_payloads(client, employee, projects):
    base = {"date": "2025-01-15", "hours": 1, "description": "Work", "projectId": projects[0].id}

    for override in ({"hours": 0}, {"hours": -2}, {"description": "   "}, {"date": "not-a-date"}, {"projectId": "abc"}):
        response = client.post("/api/time-entries", json={**base, **override})
        assert response.status_code == 400, override
        assert response.json()["detail"].startswith("Validation error")
        assert response.json()["errors"]


def test_create_time_entry_with_unknown_project(client, employee):
    response = client.post(
        "/api/time-entries",
        json={"date": "2025-01-15", "hours": 1, "description": "Work", "projectId": 42},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Project 42 does not exist"


def test_list_time_entries_newest_first(client, store, employee, projects):
    add_entry(store, employee.id, projects[0].id, TODAY - timedelta(days=2), 1, "older")
    add_entry(store, employee.id, projects[0].id, TODAY, 2, "newest")
    add_entry(store, employee.id, projects[1].id, TODAY - timedelta(days=1), 3, "middle")

    response = client.get("/api/time-entries", params={"employeeId": employee.id})

    assert response.status_code == 200
    assert [e["description"] for e in response.json()] == ["newest", "middle", "older"]


def test_list_time_entries_filters_by_day_and_range(client, store, employee, projects):
    add_entry(store, employee.id, projects[0].id, TODAY, 2, "today")
    add_entry(store, employee.id, projects[0].id, TODAY - timedelta(days=3), 1, "earlier")

    on_day = client.get("/api/time-entries", params={"date": TODAY.isoformat()})
    in_range = client.get("/api/time-entries", params={"from": "2025-01-10", "to": "2025-01-13"})

    assert [e["description"] for e in on_day.json()] == ["today"]
    assert [e["description"] for e in in_range.json()] == ["earlier"]


def test_list_time_entries_rejects_unparseable_employee_id(client):
    response = client.get("/api/time-entries", params={"employeeId": "abc"})

    assert response.status_code == 400


def test_get_update_and_delete_time_entry(client, store, employee, projects):
    entry = add_entry(store, employee.id, projects[0].id, TODAY, 2, "Draft")

    fetched = client.get(f"/api/time-entries/{entry.id}")
    assert fetched.status_code == 200
    assert fetched.json()["project"]["name"] == "Website Redesign"

    updated = client.put(f"/api/time-entries/{entry.id}", json={"hours": 4.25, "projectId": str(projects[1].id)})
    assert updated.status_code == 200
    body = updated.json()
    assert body["hours"] == 4.25
    assert body["projectId"] == projects[1].id
    assert body["description"] == "Draft"
    assert body["date"] == TODAY.isoformat()

    deleted = client.delete(f"/api/time-entries/{entry.id}")
    assert deleted.status_code == 200
    assert deleted.json() == {"message": "Time entry deleted successfully"}
    assert client.get(f"/api/time-entries/{entry.id}").status_code == 404


def test_missing_and_malformed_time_entry_ids(client):
    assert client.get("/api/time-entries/999").status_code == 404
    assert client.put("/api/time-entries/999", json={"hours": 1}).status_code == 404
    assert client.delete("/api/time-entries/999").status_code == 404
    assert client.get("/api/time-entries/abc").status_code == 400


def test_summary_with_no_entries(client, employee):
    response = client.get("/api/time-entries/summary", params={"employeeId": employee.id})

    assert response.status_code == 200
    assert response.json() == {
        "todayHours": 0,
        "weekTotal": 0,
        "dailyDiff": 0,
        "topProject": {"name": "None", "hours": 0},
    }


def test_summary_reflects_latest_writes(client, store, employee, projects):
    add_entry(store, employee.id, projects[0].id, TODAY, 3.5)
    add_entry(store, employee.id, projects[1].id, TODAY, 2)
    add_entry(store, employee.id, projects[1].id, TODAY - timedelta(days=1), 6)
    add_entry(store, employee.id, projects[1].id, TODAY - timedelta(days=9), 8)

    summary = client.get("/api/time-entries/summary").json()

    assert summary["todayHours"] == 5.5
    assert summary["dailyDiff"] == -0.5
    assert summary["weekTotal"] == 11.5
    assert summary["topProject"] == {"name": "Mobile App", "hours": 8}

    client.post(
        "/api/time-entries",
        json={"date": TODAY.isoformat(), "hours": 5, "description": "Catch up", "projectId": projects[0].id},
    )
    summary = client.get("/api/time-entries/summary").json()

    assert summary["topProject"] == {"name": "Website Redesign", "hours": 8.5}
    assert summary["todayHours"] == 10.5
