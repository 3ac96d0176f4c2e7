"""
BDD step definitions for the pet post feature (pytest-bdd).
Uses the synchronous TestClient so the real lifespan connects the store.
"""

import pytest
from fastapi.testclient import TestClient
from pytest_bdd import given, parsers, scenarios, then, when

from petspotter.main import create_app

# Load all scenarios from the feature file
scenarios("../features/petposts.feature")


@pytest.fixture
def service(settings):
    with TestClient(create_app(settings)) as client:
        yield client


@pytest.fixture
def context():
    """Tokens and the last response, shared between steps."""
    return {"tokens": {}}


def _pet_post(status: str, species: str, name: str) -> dict:
    return {"status": status, "species": species, "petName": name, "location": "Vasastan"}


@given("the service is running")
def service_running(service):
    assert service.get("/health").status_code == 200


@given(parsers.parse('a registered user "{username}"'))
def registered_user(service, context, username):
    r = service.post("/register-user", json={"username": username, "password": "password123"})
    assert r.status_code == 200
    context["tokens"][username] = r.json()["accessToken"]


@when(parsers.parse('I request "{method}" "{path}"'))
def request_path(service, context, method, path):
    context["response"] = service.request(method, path)


@when(parsers.parse('I publish a lost "{species}" called "{name}" without a token'))
def publish_anonymously(service, context, species, name):
    context["response"] = service.post("/petposts", json=_pet_post("lost", species, name))


@when(parsers.parse('"{username}" publishes a lost "{species}" called "{name}"'))
def publish_as(service, context, username, species, name):
    headers = {"Authorization": context["tokens"][username]}
    context["response"] = service.post("/petposts", json=_pet_post("lost", species, name), headers=headers)


@then(parsers.parse("the response status should be {code:d}"))
def response_status(context, code):
    assert context["response"].status_code == code


@then(parsers.parse('the response body should have "{key}" equals "{value}"'))
def body_field_equals(context, key, value):
    assert context["response"].json().get(key) == value


@then(parsers.parse("listing all pet posts should return {count:d} posts"))
def count_all(service, count):
    assert len(service.get("/petposts").json()) == count


@then(parsers.parse('listing by status "{status}" should return {count:d} posts'))
def count_by_status(service, status, count):
    r = service.get("/petposts", params={"status": status})
    assert r.status_code == 200
    assert len(r.json()) == count
