import time

import pytest

from conftest import assert_api_error, assert_api_success

BUYER = "Buyer1"


def _name(suffix=""):
    return f"Project_{time.time_ns()}{suffix}"


def _create(client, name, buyer=BUYER):
    return client.post("/api/v1/projects", json={"name": name, "buyer": buyer})


def test_create_project_returns_buyer(client):
    name = _name()
    r = _create(client, name)
    data = assert_api_success(r)
    project = data["project"]
    assert project["buyer"] == BUYER
    assert project["name"] == name
    assert project["state"] == "OPEN"


def test_get_project_by_name(client):
    name = _name()
    assert_api_success(_create(client, name))

    r = client.get(f"/api/v1/projects/{name}")
    project = assert_api_success(r)["project"]
    assert project["name"] == name
    assert project["buyer"] == BUYER


def test_get_project_by_name_with_trailing_slash(client):
    name = _name()
    assert_api_success(_create(client, name))

    r = client.get(f"/api/v1/projects/{name}/")
    assert assert_api_success(r)["project"]["name"] == name


def test_get_project_with_space_in_name(client):
    name = "Bridge Steel 2026"
    assert_api_success(_create(client, name))

    r = client.get("/api/v1/projects/Bridge%20Steel%202026")
    assert assert_api_success(r)["project"]["name"] == name


def test_get_missing_project(client):
    r = client.get("/api/v1/projects/does-not-exist")
    assert_api_error(r, 404, "project not found")


def test_duplicate_project_name(client):
    name = _name()
    assert_api_success(_create(client, name))
    r = _create(client, name, buyer="Buyer2")
    assert_api_error(r, 409, "already exists")


def test_create_project_requires_buyer(client):
    r = client.post("/api/v1/projects", json={"name": _name()})
    assert_api_error(r, 400, "buyer")


def test_create_project_rejects_slash_in_name(client):
    r = _create(client, "a/b")
    assert_api_error(r, 400, "name")


@pytest.mark.parametrize("name", ["a?b", "a#b", "Q1?draft", "#top"])
def test_create_project_rejects_query_and_fragment_chars(client, name):
    assert_api_error(_create(client, name), 400, "name")
    r = client.get("/api/v1/projects")
    assert assert_api_success(r)["projects"] == []


def test_list_projects_filtered_by_buyer(client):
    assert_api_success(_create(client, _name("a"), buyer=BUYER))
    assert_api_success(_create(client, _name("b"), buyer="Buyer2"))

    r = client.get("/api/v1/projects", params={"filter": "buyer", "buyer": BUYER})
    projects = assert_api_success(r)["projects"]
    assert isinstance(projects, list)
    assert len(projects) == 1
    assert all(p["buyer"] == BUYER for p in projects)


def test_list_projects_filtered_by_unknown_buyer_is_empty(client):
    r = client.get("/api/v1/projects", params={"filter": "buyer", "buyer": "Nobody"})
    assert assert_api_success(r)["projects"] == []


def test_list_projects_filtered_by_state(client):
    assert_api_success(_create(client, _name()))

    r = client.get("/api/v1/projects", params={"filter": "state", "state": "OPEN"})
    projects = assert_api_success(r)["projects"]
    assert isinstance(projects, list)
    assert len(projects) > 0
    assert all(p["state"] == "OPEN" for p in projects)


def test_list_projects_filtered_by_state_ordinal(client):
    assert_api_success(_create(client, _name()))

    r = client.get("/api/v1/projects", params={"filter": "state", "state": 1})
    assert len(assert_api_success(r)["projects"]) == 1

    r = client.get("/api/v1/projects", params={"filter": "state", "state": "production"})
    assert assert_api_success(r)["projects"] == []


def test_list_projects_invalid_state(client):
    r = client.get("/api/v1/projects", params={"filter": "state", "state": "SHIPPED"})
    assert_api_error(r, 400, "invalid state")


def test_list_projects_unknown_filter(client):
    r = client.get("/api/v1/projects", params={"filter": "color"})
    assert_api_error(r, 400, "unknown filter")


def test_list_projects_filter_missing_parameter(client):
    r = client.get("/api/v1/projects", params={"filter": "buyer"})
    assert_api_error(r, 400, "missing buyer parameter")


def test_list_projects_filtered_by_supplier(client):
    with_bid, without_bid = _name("x"), _name("y")
    assert_api_success(_create(client, with_bid))
    assert_api_success(_create(client, without_bid))
    assert_api_success(
        client.post(
            f"/api/v1/projects/{with_bid}/bids",
            json={"supplier": "Supplier1", "amount": 100},
        )
    )

    r = client.get("/api/v1/projects", params={"filter": "supplier", "supplier": "Supplier1"})
    projects = assert_api_success(r)["projects"]
    assert [p["name"] for p in projects] == [with_bid]


def test_list_all_projects_in_creation_order(client):
    names = [_name(str(i)) for i in range(3)]
    for n in names:
        assert_api_success(_create(client, n))

    r = client.get("/api/v1/projects")
    assert [p["name"] for p in assert_api_success(r)["projects"]] == names

    r = client.get("/api/v1/projects", params={"limit": 2})
    assert len(assert_api_success(r)["projects"]) == 2
