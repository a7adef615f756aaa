import pytest

from conftest import MISSING_ID


def test_quality_checks_require_sign_in(client):
    response = client.get("/quality-checks/recent")

    assert response.status_code == 401
    assert response.get_json()["error"] == "Unauthorized"


def test_create_check_populates_references(make_check, check_refs):
    check = make_check(
        measurements=[
            {"parameter": "Wall thickness", "value": 2.0, "unit": "mm", "actualValue": 2.1},
            {"parameter": "Weight", "value": 45, "unit": "g", "status": "Within"},
        ]
    )

    assert check["defectsFound"] == 0
    assert check["productionRunId"]["runId"] == "RUN-001"
    assert check["productionRunId"]["targetQty"] == 5000
    assert check["machineId"]["machineId"] == "IM-001"
    assert check["machineId"]["status"] == "operational"
    assert check["employeeId"]["employeeId"] == "EMP-001"
    assert check["employeeId"]["department"] == "Quality"
    assert [item["parameter"] for item in check["measurements"]] == ["Wall thickness", "Weight"]
    assert check["measurements"][0]["actualValue"] == 2.1


def test_create_check_reports_every_dangling_reference(auth_client):
    response = auth_client.post(
        "/quality-checks",
        json={
            "checkId": "QC-404",
            "productionRunId": MISSING_ID,
            "machineId": MISSING_ID,
            "employeeId": MISSING_ID,
            "checkType": "Visual",
            "result": "Pass",
        },
    )

    assert response.status_code == 400
    data = response.get_json()
    assert data["error"] == "DanglingReference"
    assert {ref["field"] for ref in data["references"]} == {
        "productionRunId",
        "machineId",
        "employeeId",
    }


def test_create_check_missing_fields(auth_client):
    response = auth_client.post("/quality-checks", json={"notes": "nothing else"})

    assert response.status_code == 400
    data = response.get_json()
    assert data["error"] == "MissingFields"
    assert set(data["missing"]) == {
        "checkId",
        "productionRunId",
        "machineId",
        "employeeId",
        "checkType",
        "result",
    }


def test_notes_longer_than_limit(auth_client, check_refs):
    response = auth_client.post(
        "/quality-checks",
        json={
            "checkId": "QC-002",
            "checkType": "Visual",
            "result": "Fail",
            "notes": "x" * 501,
            **check_refs,
        },
    )

    assert response.status_code == 400
    data = response.get_json()
    assert data["error"] == "InvalidLength"
    assert data["fields"][0]["field"] == "notes"


def test_defects_found_cannot_be_negative(auth_client, check_refs):
    response = auth_client.post(
        "/quality-checks",
        json={
            "checkId": "QC-003",
            "checkType": "Weight",
            "result": "Rework",
            "defectsFound": -1,
            **check_refs,
        },
    )

    assert response.status_code == 400
    assert response.get_json()["error"] == "InvalidNumber"


def test_measurement_status_outside_enum(auth_client, check_refs):
    response = auth_client.post(
        "/quality-checks",
        json={
            "checkId": "QC-004",
            "checkType": "Measurement",
            "result": "Pass",
            "measurements": [{"parameter": "Length", "status": "Maybe"}],
            **check_refs,
        },
    )

    assert response.status_code == 400
    data = response.get_json()
    assert data["error"] == "InvalidEnum"
    assert data["fields"][0]["field"] == "measurements[0].status"


def test_recent_checks_are_newest_first_and_limited(auth_client, make_check):
    for day in range(1, 8):
        make_check(checkId=f"QC-{day:03d}", checkDate=f"2024-03-0{day}T10:00:00Z")

    response = auth_client.get("/quality-checks/recent?limit=5")

    assert response.status_code == 200
    data = response.get_json()
    assert len(data) == 5
    assert [item["checkId"] for item in data] == ["QC-007", "QC-006", "QC-005", "QC-004", "QC-003"]
    dates = [item["checkDate"] for item in data]
    assert dates == sorted(dates, reverse=True)


@pytest.mark.parametrize("raw_limit", ["abc", "0", "-3"])
def test_recent_checks_fall_back_to_default_limit(auth_client, make_check, raw_limit):
    for index in range(12):
        make_check(checkId=f"QC-{index:03d}")

    data = auth_client.get(f"/quality-checks/recent?limit={raw_limit}").get_json()

    assert len(data) == 10


def test_list_summaries_are_brief(auth_client, make_check):
    make_check()

    item = auth_client.get("/quality-checks").get_json()[0]

    assert set(item["productionRunId"]) == {"_id", "runId", "partName", "partNumber"}
    assert set(item["machineId"]) == {"_id", "name", "machineId"}
    assert set(item["employeeId"]) == {"_id", "firstName", "lastName", "employeeId"}


def test_list_filters(auth_client, make_check):
    make_check(checkId="QC-001", result="Pass", checkType="Visual", checkDate="2024-01-10T00:00:00Z")
    make_check(checkId="QC-002", result="Fail", checkType="Weight", checkDate="2024-02-10T00:00:00Z")
    make_check(checkId="QC-003", result="Fail", checkType="Visual", checkDate="2024-03-10T00:00:00Z")

    def ids(query):
        return [item["checkId"] for item in auth_client.get(f"/quality-checks{query}").get_json()]

    assert ids("?result=Fail") == ["QC-003", "QC-002"]
    assert ids("?checkType=Visual") == ["QC-003", "QC-001"]
    assert ids("?startDate=2024-02-01&endDate=2024-02-28") == ["QC-002"]
    assert ids("/result/Pass") == ["QC-001"]


def test_list_rejects_bad_filters(auth_client):
    assert auth_client.get("/quality-checks?result=Maybe").get_json()["error"] == "InvalidEnum"
    assert auth_client.get("/quality-checks/result/Maybe").get_json()["error"] == "InvalidEnum"
    bad_date = auth_client.get("/quality-checks?startDate=yesterday")
    assert bad_date.status_code == 400
    assert bad_date.get_json()["error"] == "InvalidFormat"


def test_update_replaces_measurements(auth_client, make_check):
    check = make_check(measurements=[{"parameter": "A"}, {"parameter": "B"}])

    response = auth_client.put(
        f"/quality-checks/{check['_id']}",
        json={"measurements": [{"parameter": "C", "value": 1.5}], "result": "Hold"},
    )

    assert response.status_code == 200
    data = response.get_json()
    assert data["result"] == "Hold"
    assert [item["parameter"] for item in data["measurements"]] == ["C"]


def test_update_without_measurements_keeps_them(auth_client, make_check):
    check = make_check(measurements=[{"parameter": "A"}, {"parameter": "B"}])

    data = auth_client.put(
        f"/quality-checks/{check['_id']}", json={"notes": "Rechecked"}
    ).get_json()

    assert data["notes"] == "Rechecked"
    assert [item["parameter"] for item in data["measurements"]] == ["A", "B"]


def test_deleted_references_populate_as_null(client, auth_client, make_check, check_refs):
    check = make_check()

    client.delete(f"/production-runs/{check_refs['productionRunId']}")
    client.delete(f"/machines/{check_refs['machineId']}")

    data = auth_client.get(f"/quality-checks/{check['_id']}").get_json()
    assert data["productionRunId"] is None
    assert data["machineId"] is None
    assert data["employeeId"]["employeeId"] == "EMP-001"


def test_delete_check(auth_client, make_check):
    check = make_check()

    response = auth_client.delete(f"/quality-checks/{check['_id']}")

    assert response.status_code == 200
    assert response.get_json()["deletedCheck"]["checkId"] == "QC-001"
    assert auth_client.get(f"/quality-checks/{check['_id']}").status_code == 404


def test_defects_found_beyond_storable_range(auth_client, check_refs):
    response = auth_client.post(
        "/quality-checks",
        json={
            "checkId": "QC-005",
            "checkType": "Visual",
            "result": "Fail",
            "defectsFound": 10**20,
            **check_refs,
        },
    )

    assert response.status_code == 400
    data = response.get_json()
    assert data["error"] == "InvalidNumber"
    assert data["fields"][0]["field"] == "defectsFound"


def test_check_id_longer_than_column(auth_client, check_refs):
    response = auth_client.post(
        "/quality-checks",
        json={"checkId": "Q" * 65, "checkType": "Visual", "result": "Pass", **check_refs},
    )

    assert response.status_code == 400
    assert response.get_json()["error"] == "InvalidLength"


def test_check_dates_carry_utc_offset(make_check):
    check = make_check(
        checkDate="2024-05-01T10:00:00+02:00", nextCheckDate="2024-05-08T08:00:00Z"
    )

    assert check["checkDate"] == "2024-05-01T08:00:00+00:00"
    assert check["nextCheckDate"] == "2024-05-08T08:00:00+00:00"
    assert check["createdAt"].endswith("+00:00")


@pytest.mark.parametrize("field", ["productionRunId", "machineId", "employeeId"])
def test_update_check_with_unknown_reference(auth_client, make_check, check_refs, field):
    check = make_check()

    response = auth_client.put(f"/quality-checks/{check['_id']}", json={field: MISSING_ID})

    assert response.status_code == 400
    data = response.get_json()
    assert data["error"] == "DanglingReference"
    assert data["field"] == field
    unchanged = auth_client.get(f"/quality-checks/{check['_id']}").get_json()
    assert unchanged[field]["_id"] == check_refs[field]
