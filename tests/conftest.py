import pytest

from moldtrack import create_app
from moldtrack.config import TestingConfig
from moldtrack.extensions import db

MISSING_ID = "507f1f77bcf86cd799439011"


@pytest.fixture(scope="function")
def app():
    app = create_app(TestingConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope="function")
def client(app):
    return app.test_client()


def _sign_in(client, email):
    with client.session_transaction() as sess:
        sess["identity"] = {
            "id": "google-oauth2|1234",
            "displayName": "Test User",
            "email": email,
            "provider": "google",
        }
    return client


@pytest.fixture(scope="function")
def auth_client(app):
    return _sign_in(app.test_client(), "test@example.com")


@pytest.fixture(scope="function")
def sign_in(app):
    """Return a factory producing clients signed in as ``email``."""

    def factory(email):
        return _sign_in(app.test_client(), email)

    return factory


@pytest.fixture(scope="function")
def make_machine(client):
    def factory(**overrides):
        payload = {"machineId": "IM-001", "name": "Toshiba 350T", **overrides}
        response = client.post("/machines", json=payload)
        assert response.status_code == 201, response.get_json()
        return response.get_json()

    return factory


@pytest.fixture(scope="function")
def make_run(client, make_machine):
    def factory(machine=None, **overrides):
        machine = machine or make_machine()
        payload = {
            "runId": "RUN-001",
            "machineId": machine["_id"],
            "partNumber": "HOUSING-A",
            "partName": "Main Housing Assembly",
            "material": "ABS Plastic",
            "targetQty": 5000,
            **overrides,
        }
        response = client.post("/production-runs", json=payload)
        assert response.status_code == 201, response.get_json()
        return response.get_json()

    return factory


@pytest.fixture(scope="function")
def make_employee(auth_client):
    def factory(**overrides):
        payload = {
            "employeeId": "EMP-001",
            "firstName": "Jane",
            "lastName": "Smith",
            "email": "jane.smith@example.com",
            "department": "Quality",
            "role": "Inspector",
            **overrides,
        }
        response = auth_client.post("/employees", json=payload)
        assert response.status_code == 201, response.get_json()
        return response.get_json()

    return factory


@pytest.fixture(scope="function")
def check_refs(make_machine, make_run, make_employee):
    """Create one machine, run and employee a quality check can reference."""

    machine = make_machine()
    run = make_run(machine=machine)
    employee = make_employee()
    return {
        "productionRunId": run["_id"],
        "machineId": machine["_id"],
        "employeeId": employee["_id"],
    }


@pytest.fixture(scope="function")
def make_check(auth_client, check_refs):
    def factory(**overrides):
        payload = {
            "checkId": "QC-001",
            "checkType": "Visual",
            "result": "Pass",
            **check_refs,
            **overrides,
        }
        response = auth_client.post("/quality-checks", json=payload)
        assert response.status_code == 201, response.get_json()
        return response.get_json()

    return factory
