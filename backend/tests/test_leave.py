from datetime import date, datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import IntegrityError

from conftest import add_allocation, add_application


def test_create_and_list_leave_types(client):
    created = client.post("/api/leave-types", json={"name": "Annual Leave", "description": "Vacation"})

    assert created.status_code == 201
    assert created.json()["color"] == "#2563EB"
    assert client.post("/api/leave-types", json={"name": "Bad", "color": "blue"}).status_code == 400

    listed = client.get("/api/leave-types").json()
    assert [t["name"] for t in listed] == ["Annual Leave"]


def test_leave_allocations_create_list_update(client, employee, leave_types):
    created = client.post(
        "/api/leave-allocations",
        json={"employeeId": employee.id, "leaveTypeId": leave_types[0].id, "allocatedDays": "21", "year": 2025},
    )
    assert created.status_code == 201
    allocation = created.json()
    assert allocation["allocatedDays"] == 21
    assert allocation["leaveType"]["name"] == "Annual Leave"

    updated = client.put(f"/api/leave-allocations/{allocation['id']}", json={"allocatedDays": 18.5})
    assert updated.status_code == 200
    assert updated.json()["allocatedDays"] == 18.5
    assert updated.json()["year"] == 2025

    listed = client.get("/api/leave-allocations", params={"employeeId": employee.id}).json()
    assert [a["id"] for a in listed] == [allocation["id"]]

    missing_type = client.post(
        "/api/leave-allocations",
        json={"employeeId": employee.id, "leaveTypeId": 99, "allocatedDays": 1, "year": 2025},
    )
    assert missing_type.status_code == 400


def test_create_leave_application_starts_pending(client, employee, leave_types):
    response = client.post(
        "/api/leave-applications",
        json={
            "leaveTypeId": leave_types[0].id,
            "fromDate": "2025-02-03",
            "toDate": "2025-02-07",
            "reason": "Family vacation",
            "status": "approved",
        },
    )

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "pending"
    assert body["employeeId"] == employee.id
    assert body["isHalfDay"] is False
    assert body["leaveType"]["name"] == "Annual Leave"
    assert body["approvedById"] is None


def test_leave_application_rejects_reversed_range(client, employee, leave_types):
    response = client.post(
        "/api/leave-applications",
        json={"leaveTypeId": leave_types[0].id, "fromDate": "2025-02-07", "toDate": "2025-02-03", "reason": "Oops"},
    )

    assert response.status_code == 400


def test_approve_and_reject_transitions(client, store, employee, leave_types):
    first = add_application(store, employee.id, leave_types[0].id, date(2025, 2, 3), date(2025, 2, 4))
    second = add_application(store, employee.id, leave_types[1].id, date(2025, 3, 3), date(2025, 3, 3))

    approved = client.post(f"/api/leave-applications/{first.id}/approve", json={"approvedById": employee.id})
    assert approved.status_code == 200
    assert approved.json()["status"] == "approved"
    assert approved.json()["approvedAt"]

    again = client.post(f"/api/leave-applications/{first.id}/reject", json={"rejectionReason": "Too late"})
    assert again.status_code == 409

    rejected = client.post(f"/api/leave-applications/{second.id}/reject", json={"rejectionReason": "Busy week"})
    assert rejected.status_code == 200
    assert rejected.json()["status"] == "rejected"
    assert rejected.json()["rejectionReason"] == "Busy week"

    assert client.put(f"/api/leave-applications/{second.id}", json={"reason": "Retry"}).status_code == 409


def test_update_and_delete_pending_application(client, store, employee, leave_types):
    application = add_application(store, employee.id, leave_types[0].id, date(2025, 2, 3), date(2025, 2, 4))

    updated = client.put(f"/api/leave-applications/{application.id}", json={"isHalfDay": True, "toDate": "2025-02-03"})
    assert updated.status_code == 200
    assert updated.json()["isHalfDay"] is True
    assert updated.json()["toDate"] == "2025-02-03"
    assert updated.json()["reason"] == "Time off"

    reversed_range = client.put(f"/api/leave-applications/{application.id}", json={"fromDate": "2025-02-10"})
    assert reversed_range.status_code == 400

    assert client.delete(f"/api/leave-applications/{application.id}").status_code == 200
    assert client.get(f"/api/leave-applications/{application.id}").status_code == 404


def test_leave_summary_endpoint(client, store, employee, leave_types):
    annual, sick = leave_types
    add_allocation(store, employee.id, annual.id, 21)
    add_allocation(store, employee.id, sick.id, 2)
    add_application(store, employee.id, annual.id, date(2025, 2, 3), date(2025, 2, 7), status="approved")
    add_application(store, employee.id, annual.id, date(2025, 3, 3), date(2025, 3, 3), is_half_day=True)
    add_application(store, employee.id, sick.id, date(2025, 1, 6), date(2025, 1, 8), status="approved")
    add_application(store, employee.id, sick.id, date(2025, 1, 20), date(2025, 1, 24), status="rejected")

    response = client.get("/api/leave-summary")

    assert response.status_code == 200
    body = response.json()
    rows = [(a["leaveType"]["name"], a["allocated"], a["used"], a["pending"], a["remaining"]) for a in body["allocations"]]
    assert rows == [("Annual Leave", 21, 5, 0.5, 15.5), ("Sick Leave", 2, 3, 0, -1)]
    assert body["totalAllocated"] == 23
    assert body["totalUsed"] == 8
    assert body["totalPending"] == 0.5
    assert body["totalRemaining"] == 14.5


def test_leave_summary_for_employee_without_allocations(client, employee):
    response = client.get("/api/leave-summary", params={"employeeId": employee.id})

    assert response.json() == {
        "allocations": [],
        "totalAllocated": 0,
        "totalUsed": 0,
        "totalPending": 0,
        "totalRemaining": 0,
    }


def test_blank_leave_type_name_is_rejected_and_list_still_works(client, leave_types):
    assert client.post("/api/leave-types", json={"name": "   "}).status_code == 400

    listed = client.get("/api/leave-types")
    assert listed.status_code == 200
    assert [t["name"] for t in listed.json()] == ["Annual Leave", "Sick Leave"]


def test_blank_leave_reasons_are_rejected(client, store, employee, leave_types):
    created = client.post(
        "/api/leave-applications",
        json={"leaveTypeId": leave_types[0].id, "fromDate": "2025-02-03", "toDate": "2025-02-03", "reason": "   "},
    )
    assert created.status_code == 400

    application = add_application(store, employee.id, leave_types[0].id, date(2025, 2, 3), date(2025, 2, 4))
    assert client.put(f"/api/leave-applications/{application.id}", json={"reason": "  "}).status_code == 400

    rejected = client.post(f"/api/leave-applications/{application.id}/reject", json={"rejectionReason": "  no  "})
    assert rejected.status_code == 400
    assert client.get(f"/api/leave-applications/{application.id}").json()["status"] == "pending"


def test_application_status_outside_known_values_is_refused(store, employee, leave_types):
    with pytest.raises(IntegrityError):
        add_application(store, employee.id, leave_types[0].id, date(2025, 2, 3), date(2025, 2, 4), status="cancelled")


def test_approval_time_is_recorded_in_utc(client, store, employee, leave_types):
    application = add_application(store, employee.id, leave_types[0].id, date(2025, 2, 3), date(2025, 2, 4))
    before = datetime.now(timezone.utc).replace(tzinfo=None, microsecond=0)

    approved = client.post(f"/api/leave-applications/{application.id}/approve", json={"approvedById": employee.id})

    approved_at = datetime.fromisoformat(approved.json()["approvedAt"])
    assert approved_at.tzinfo is None
    assert before <= approved_at <= before + timedelta(minutes=1)
