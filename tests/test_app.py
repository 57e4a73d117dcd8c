from __future__ import annotations

from pathlib import Path

import pytest

from nixtz_web.app import create_app

WEEK = "2025-01-06"


@pytest.fixture()
def client(tmp_path: Path):
    db_path = tmp_path / "test.sqlite"
    app = create_app({
        "TESTING": True,
        "DATABASE": str(db_path),
    })
    with app.test_client() as client:
        yield client


def _entry(roster, name):
    return next(entry for entry in roster if entry["employeeName"] == name)


def _day(entry, day):
    return next(item for item in entry["weeklySchedule"] if item["dayOfWeek"] == day)["shifts"]


def test_healthz(client):
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.data == b"OK"


def test_index_lists_api_routes(client):
    endpoints = client.get("/").get_json()["endpoints"]
    assert "/api/staff/roster/generate/<start_date>" in endpoints
    assert "/api/staff/leave/history" in endpoints


def test_seeded_staff_profiles(client):
    staff = client.get("/api/staff/profile").get_json()["staff"]
    assert len(staff) == 10
    assert staff[0]["name"] == "AM"
    assert all(profile["requestExpired"] is False for profile in staff)


def test_generate_and_fetch_roster(client):
    # Any day of the week snaps back to its Monday.
    resp_generate = client.get("/api/staff/roster/generate/2025-01-08")
    assert resp_generate.status_code == 200
    payload = resp_generate.get_json()
    assert payload["weekStartDate"] == WEEK
    assert len(payload["roster"]) == 10
    assert payload["coverage"]["Mon"]["Night"] == 2

    pae = _entry(payload["roster"], "Pae")
    assert _day(pae, "Mon")[0]["jobRole"] == "Z1 (Mgr)"
    assert _day(pae, "Sun")[0]["jobRole"] == "Day Off (Fixed)"
    # Ton is off on Monday, so Bank covers delivery alone.
    bank = _entry(payload["roster"], "Bank")
    assert _day(bank, "Mon")[0] == {
        "shiftId": 1, "jobRole": "C3 (Del Cov)", "timeRange": "07:00-21:00", "color": "#00B0F0",
    }

    resp_fetch = client.get(f"/api/staff/roster/{WEEK}")
    assert resp_fetch.status_code == 200
    saved = resp_fetch.get_json()["roster"]
    assert [entry["employeeName"] for entry in saved][:3] == ["AM", "Bank", "Bee"]
    assert _entry(saved, "Pae") == pae
    assert client.get("/api/staff/roster/weeks").get_json() == {"weeks": [WEEK]}


def test_generation_replaces_the_saved_week(client):
    client.get(f"/api/staff/roster/generate/{WEEK}")
    client.delete("/api/staff/profile/E010")
    client.get(f"/api/staff/roster/generate/{WEEK}")

    saved = client.get(f"/api/staff/roster/{WEEK}").get_json()["roster"]
    assert len(saved) == 9
    assert all(entry["employeeName"] != "Golf" for entry in saved)


def test_generate_rejects_empty_org_and_bad_dates(client):
    resp_empty = client.get(f"/api/staff/roster/generate/{WEEK}", headers={"X-Org-Id": "empty"})
    assert resp_empty.status_code == 400
    assert resp_empty.get_json()["error"] == "No staff profiles to generate a roster"

    assert client.get("/api/staff/roster/generate/06-01-2025").status_code == 400
    assert client.get("/api/staff/roster/not-a-date").status_code == 400


def test_organizations_are_isolated(client):
    client.get(f"/api/staff/roster/generate/{WEEK}")

    assert client.get(f"/api/staff/roster/{WEEK}?org=acme").get_json()["roster"] == []
    assert client.get("/api/staff/profile", headers={"X-Org-Id": "acme"}).get_json()["staff"] == []


def test_staff_crud(client):
    headers = {"X-Org-Id": "acme"}
    profile = {"employeeId": "A1", "name": " Mint ", "position": "Normal Staff", "shiftPreference": "Night"}

    resp_create = client.post("/api/staff/profile", json=profile, headers=headers)
    assert resp_create.status_code == 201
    created = resp_create.get_json()["staff"]
    assert created["name"] == "Mint"
    assert created["fixedDayOff"] == "None"
    assert created["nextWeekHolidayRequest"] == "None"

    assert client.post("/api/staff/profile", json=profile, headers=headers).status_code == 409
    assert client.post("/api/staff/profile", json={"name": "X"}, headers=headers).status_code == 400
    bad_position = {**profile, "employeeId": "A2", "position": "Chef"}
    assert client.post("/api/staff/profile", json=bad_position, headers=headers).status_code == 400

    resp_update = client.put("/api/staff/profile/A1", json={"fixedDayOff": "Sat"}, headers=headers)
    assert resp_update.status_code == 200
    assert resp_update.get_json()["staff"]["fixedDayOff"] == "Sat"
    assert resp_update.get_json()["staff"]["shiftPreference"] == "Night"

    assert client.put("/api/staff/profile/ZZ", json={"name": "Y"}, headers=headers).status_code == 404
    assert client.put("/api/staff/profile/A1", json={"fixedDayOff": "Someday"}, headers=headers).status_code == 400

    assert client.delete("/api/staff/profile/A1", headers=headers).get_json() == {"deleted": 1}
    assert client.get("/api/staff/profile", headers=headers).get_json()["staff"] == []


def test_requests_feed_the_generator(client):
    resp_set = client.put(
        "/api/staff/profile/E007/request",
        json={"weekStartDate": "2025-01-09", "value": "Wed"},
    )
    assert resp_set.status_code == 200
    assert resp_set.get_json()["nextWeekHolidayRequest"] == "2025-01-06:Wed"

    roster = client.get(f"/api/staff/roster/generate/{WEEK}").get_json()["roster"]
    mint = _entry(roster, "Mint")
    assert _day(mint, "Wed")[0]["jobRole"] == "Leave (Requested)"
    assert _day(mint, "Tue")[0]["jobRole"] == "Day Off (Fixed)"

    # The same request is ignored for the following week.
    next_week = client.get("/api/staff/roster/generate/2025-01-13").get_json()["roster"]
    assert _day(_entry(next_week, "Mint"), "Wed")[0]["shiftId"] == 1

    resp_clear = client.delete("/api/staff/profile/E007/request")
    assert resp_clear.get_json() == {"nextWeekHolidayRequest": "None"}


def test_request_validation(client):
    bad_value = client.put("/api/staff/profile/E007/request", json={"weekStartDate": WEEK, "value": "Holiday"})
    assert bad_value.status_code == 400
    bad_week = client.put("/api/staff/profile/E007/request", json={"value": "Wed"})
    assert bad_week.status_code == 400
    unknown = client.put("/api/staff/profile/NOPE/request", json={"weekStartDate": WEEK, "value": "Wed"})
    assert unknown.status_code == 404
    assert client.delete("/api/staff/profile/NOPE/request").status_code == 404


def test_stale_requests_are_flagged(client):
    client.put("/api/staff/profile/E008/request", json={"weekStartDate": "2020-01-06", "value": "Mon"})

    staff = client.get("/api/staff/profile").get_json()["staff"]
    ploy = next(profile for profile in staff if profile["name"] == "Ploy")
    assert ploy["requestExpired"] is True


def test_shift_settings(client):
    shifts = client.get("/api/staff/shifts").get_json()["shifts"]
    assert shifts["1"]["time"] == "07:00-16:00"
    assert shifts["3"]["required"] == "N/A"

    resp_save = client.post("/api/staff/shifts", json={"1": "06:00-15:00"})
    assert resp_save.status_code == 200
    assert resp_save.get_json()["shifts"]["1"]["time"] == "06:00-15:00"
    assert client.get("/api/staff/shifts").get_json()["shifts"]["1"]["time"] == "06:00-15:00"

    roster = client.get(f"/api/staff/roster/generate/{WEEK}").get_json()["roster"]
    assert _day(_entry(roster, "Pae"), "Mon")[0]["timeRange"] == "06:00-15:00"

    # Other organizations keep the defaults.
    other = client.get("/api/staff/shifts?org=acme").get_json()["shifts"]
    assert other["1"]["time"] == "07:00-16:00"

    assert client.post("/api/staff/shifts", json={"1": "6am"}).status_code == 400
    assert client.post("/api/staff/shifts", json={"9": "06:00-15:00"}).status_code == 400
    assert client.post("/api/staff/shifts", json={}).status_code == 400


def test_save_manual_roster(client):
    payload = {
        "weekStartDate": "2025-01-15",
        "rosterData": [
            {
                "employeeName": "Temp",
                "weeklySchedule": [
                    {"dayOfWeek": "Mon", "shifts": [
                        {"shiftId": 1, "jobRole": "C4", "timeRange": "07:00-16:00", "color": "#FFFFFF"},
                    ]},
                ],
            },
            {"employeeName": "   "},
        ],
    }
    resp_save = client.post("/api/staff/roster", json=payload)
    assert resp_save.status_code == 200
    assert resp_save.get_json() == {"weekStartDate": "2025-01-13", "saved": 1}

    saved = client.get("/api/staff/roster/2025-01-13").get_json()["roster"]
    assert len(saved) == 1
    assert saved[0]["employeeId"] == "Temp"
    assert _day(saved[0], "Mon")[0]["jobRole"] == "C4"
    assert _day(saved[0], "Tue") == []

    assert client.post("/api/staff/roster", json={"weekStartDate": WEEK}).status_code == 400
    assert client.post("/api/staff/roster", json={"rosterData": []}).status_code == 400


def test_export_xlsx(client):
    assert client.get(f"/api/staff/roster/{WEEK}/export.xlsx").status_code == 404

    client.get(f"/api/staff/roster/generate/{WEEK}")
    resp_export = client.get(f"/api/staff/roster/{WEEK}/export.xlsx")
    assert resp_export.status_code == 200
    assert "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet" in resp_export.headers["Content-Type"]
    assert "roster_2025-01-06.xlsx" in resp_export.headers["Content-Disposition"]


def test_leave_history_and_report(client):
    leave = {"employeeId": "E002", "employeeName": "AM", "leaveDate": "2025-03-10", "leaveType": "Holiday"}

    resp_create = client.post("/api/staff/leave/history", json=leave)
    assert resp_create.status_code == 201
    leave_id = resp_create.get_json()["id"]

    duplicate = client.post("/api/staff/leave/history", json=leave)
    assert duplicate.status_code == 200
    assert duplicate.get_json()["created"] is False

    client.post("/api/staff/leave/history", json={**leave, "leaveDate": "2025-03-11", "leaveType": "Sick Leave"})
    assert client.post("/api/staff/leave/history", json={**leave, "leaveType": "Vacation"}).status_code == 400
    assert client.post("/api/staff/leave/history", json={**leave, "leaveDate": "10/03/2025"}).status_code == 400
    assert client.post("/api/staff/leave/history", json={"employeeId": "E002"}).status_code == 400

    report = client.get("/api/staff/leave/report/2025").get_json()["report"]
    assert report == [{
        "employeeId": "E002",
        "employeeName": "AM",
        "types": [{"leaveType": "Holiday", "count": 1}, {"leaveType": "Sick Leave", "count": 1}],
        "totalDays": 2,
    }]
    assert client.get("/api/staff/leave/report/2024").get_json()["report"] == []
    assert client.get("/api/staff/leave/report/abc").status_code == 400
    assert client.get("/api/staff/leave/report/1999").status_code == 400

    details = client.get("/api/staff/leave/details?year=2025&employeeId=E002").get_json()["records"]
    assert [record["leaveDate"] for record in details] == ["2025-03-10", "2025-03-11"]

    assert client.delete(f"/api/staff/leave/{leave_id}").get_json() == {"deleted": 1}
    assert len(client.get("/api/staff/leave/details?year=2025").get_json()["records"]) == 1


@pytest.mark.parametrize(
    "entry",
    [
        {"employeeName": "X", "weeklySchedule": [1]},
        {"employeeName": "X", "weeklySchedule": "Mon"},
        {"employeeName": "X", "weeklySchedule": [{"dayOfWeek": "Mon", "shifts": [{"shiftId": "abc"}]}]},
        {"employeeName": "X", "weeklySchedule": [{"dayOfWeek": "Mon", "shifts": ["C4"]}]},
    ],
)
def test_save_roster_rejects_malformed_entries(client, entry):
    response = client.post("/api/staff/roster", json={"weekStartDate": WEEK, "rosterData": [entry]})

    assert response.status_code == 400
    assert "error" in response.get_json()
    assert client.get(f"/api/staff/roster/{WEEK}").get_json()["roster"] == []
