from conftest import MISSING_ID


def test_create_run_populates_machine(client, make_machine):
    machine = make_machine()

    response = client.post(
        "/production-runs",
        json={
            "runId": "RUN-001",
            "machineId": machine["_id"],
            "partNumber": "HOUSING-A",
            "partName": "Main Housing Assembly",
            "material": "ABS Plastic",
            "targetQty": 5000,
        },
    )

    assert response.status_code == 201
    data = response.get_json()
    assert data["status"] == "scheduled"
    assert data["actualQty"] == 0
    assert data["startTime"]
    assert data["endTime"] is None
    assert data["machineId"]["_id"] == machine["_id"]
    assert data["machineId"]["name"] == "Toshiba 350T"


def test_create_run_with_unknown_machine(client):
    response = client.post(
        "/production-runs",
        json={
            "runId": "RUN-404",
            "machineId": MISSING_ID,
            "partNumber": "P-1",
            "partName": "Bracket",
            "material": "PP",
            "targetQty": 100,
        },
    )

    assert response.status_code == 400
    data = response.get_json()
    assert data["error"] == "DanglingReference"
    assert data["field"] == "machineId"
    assert data["value"] == MISSING_ID


def test_create_run_with_malformed_machine_reference(client):
    response = client.post(
        "/production-runs",
        json={
            "runId": "RUN-405",
            "machineId": "not-an-id",
            "partNumber": "P-1",
            "partName": "Bracket",
            "material": "PP",
            "targetQty": 100,
        },
    )

    assert response.status_code == 400
    assert response.get_json()["error"] == "DanglingReference"


def test_create_run_lists_missing_fields(client):
    response = client.post("/production-runs", json={"operator": "Sam"})

    assert response.status_code == 400
    data = response.get_json()
    assert data["error"] == "MissingFields"
    assert set(data["missing"]) == {
        "runId",
        "machineId",
        "partNumber",
        "partName",
        "material",
        "targetQty",
    }


def test_target_quantity_must_be_positive(client, make_machine):
    machine = make_machine()

    response = client.post(
        "/production-runs",
        json={
            "runId": "RUN-002",
            "machineId": machine["_id"],
            "partNumber": "P-2",
            "partName": "Cap",
            "material": "PE",
            "targetQty": 0,
        },
    )

    assert response.status_code == 400
    data = response.get_json()
    assert data["error"] == "InvalidNumber"
    assert data["fields"][0]["field"] == "targetQty"


def test_duplicate_run_id(client, make_run):
    run = make_run()

    response = client.post(
        "/production-runs",
        json={
            "runId": "RUN-001",
            "machineId": run["machineId"]["_id"],
            "partNumber": "P-3",
            "partName": "Lid",
            "material": "PP",
            "targetQty": 10,
        },
    )

    assert response.status_code == 400
    assert response.get_json()["error"] == "DuplicateKey"


def test_list_runs_filters_and_order(client, make_machine, make_run):
    press = make_machine(machineId="IM-001")
    other = make_machine(machineId="IM-002", name="Arburg 470")
    make_run(machine=press, runId="RUN-001", startTime="2024-01-01T08:00:00Z")
    make_run(machine=press, runId="RUN-002", startTime="2024-01-02T08:00:00Z", status="running")
    make_run(machine=other, runId="RUN-003", startTime="2024-01-03T08:00:00Z")

    everything = client.get("/production-runs").get_json()
    assert [item["runId"] for item in everything] == ["RUN-003", "RUN-002", "RUN-001"]

    running = client.get("/production-runs?status=running").get_json()
    assert [item["runId"] for item in running] == ["RUN-002"]

    on_press = client.get(f"/production-runs?machineId={press['_id']}").get_json()
    assert [item["runId"] for item in on_press] == ["RUN-002", "RUN-001"]
    assert all(item["machineId"]["machineId"] == "IM-001" for item in on_press)


def test_list_runs_rejects_unknown_status(client):
    response = client.get("/production-runs?status=melting")

    assert response.status_code == 400
    assert response.get_json()["error"] == "InvalidEnum"


def test_list_runs_rejects_malformed_machine_filter(client):
    response = client.get("/production-runs?machineId=abc")

    assert response.status_code == 400
    assert response.get_json()["error"] == "InvalidId"


def test_deleted_machine_populates_as_null(client, make_run):
    run = make_run()

    client.delete(f"/machines/{run['machineId']['_id']}")

    fetched = client.get(f"/production-runs/{run['_id']}")
    assert fetched.status_code == 200
    assert fetched.get_json()["machineId"] is None
    assert client.get("/production-runs").get_json()[0]["machineId"] is None


def test_update_run_progress(client, make_run):
    run = make_run()

    response = client.put(
        f"/production-runs/{run['_id']}",
        json={"actualQty": 1250, "status": "running"},
    )

    assert response.status_code == 200
    data = response.get_json()
    assert data["actualQty"] == 1250
    assert data["status"] == "running"
    assert data["targetQty"] == 5000


def test_update_run_with_unknown_machine(client, make_run):
    run = make_run()

    response = client.put(f"/production-runs/{run['_id']}", json={"machineId": MISSING_ID})

    assert response.status_code == 400
    assert response.get_json()["error"] == "DanglingReference"
    unchanged = client.get(f"/production-runs/{run['_id']}").get_json()
    assert unchanged["machineId"]["_id"] == run["machineId"]["_id"]


def test_update_run_with_malformed_id(client):
    response = client.put("/production-runs/123", json={"status": "running"})

    assert response.status_code == 400
    assert response.get_json()["error"] == "InvalidId"


def test_delete_run_returns_summary(client, make_run):
    run = make_run()

    response = client.delete(f"/production-runs/{run['_id']}")

    assert response.status_code == 200
    assert response.get_json()["deletedRun"] == {
        "_id": run["_id"],
        "runId": "RUN-001",
        "partName": "Main Housing Assembly",
        "partNumber": "HOUSING-A",
    }
    assert client.get(f"/production-runs/{run['_id']}").status_code == 404


def test_run_times_come_back_with_utc_offset(client, make_run):
    run = make_run(startTime="2024-05-01T08:00:00Z", endTime="2024-05-01T16:30:00+01:00")

    fetched = client.get(f"/production-runs/{run['_id']}").get_json()

    assert fetched["startTime"] == "2024-05-01T08:00:00+00:00"
    assert fetched["endTime"] == "2024-05-01T15:30:00+00:00"
    assert fetched["updatedAt"].endswith("+00:00")
