import pytest

from bookkeeping import db


@pytest.mark.unit
def test_api_tags_create_and_conflict(client) -> None:
    created = client.post("/api/tags", json={"text": "FLP"})
    duplicate = client.post("/api/tags", json={"text": "FLP"})

    assert created.status_code == 201
    assert created.get_json()["data"]["text"] == "FLP"
    assert duplicate.status_code == 409
    assert duplicate.get_json()["errors"][0] == {"status": "409", "title": "The provided entity already exists"}


@pytest.mark.unit
def test_api_tags_create_rejects_blank_text(client) -> None:
    response = client.post("/api/tags", json={"text": "   "})

    assert response.status_code == 400
    assert response.get_json()["errors"][0]["source"] == {"pointer": "/data/attributes/body/text"}


@pytest.mark.unit
def test_api_tags_list_and_get(client, make_tag) -> None:
    tags = [make_tag(text) for text in ("FOOD", "RUN", "TEST")]
    db.session.commit()

    listed = client.get("/api/tags", query_string={"page[limit]": "2"})
    single = client.get(f"/api/tags/{tags[1].id}")

    assert [item["text"] for item in listed.get_json()["data"]] == ["FOOD", "RUN"]
    assert listed.get_json()["meta"] == {"page": {"pageCount": 2, "totalCount": 3}}
    assert single.get_json()["data"]["text"] == "RUN"


@pytest.mark.unit
def test_api_tags_delete_returns_deleted_tag(client, make_tag) -> None:
    tag = make_tag("OTHER")
    db.session.commit()
    tag_id = tag.id

    deleted = client.delete(f"/api/tags/{tag_id}")
    missing = client.get(f"/api/tags/{tag_id}")

    assert deleted.status_code == 200
    assert deleted.get_json()["data"]["id"] == tag_id
    assert missing.status_code == 404


@pytest.mark.unit
def test_api_tags_logs_lists_tagged_logs(client, log_factory, make_tag) -> None:
    tag = make_tag("GLOBAL")
    tagged = log_factory.create("Tagged log", tags=[tag])
    log_factory.create("Untagged log")
    db.session.commit()

    response = client.get(f"/api/tags/{tag.id}/logs")

    assert response.status_code == 200
    assert [item["id"] for item in response.get_json()["data"]] == [tagged.id]


@pytest.mark.unit
def test_api_subsystems_lifecycle(client) -> None:
    created = client.post("/api/subsystems", json={"text": "TPC"})
    subsystem_id = created.get_json()["data"]["id"]

    listed = client.get("/api/subsystems")
    fetched = client.get(f"/api/subsystems/{subsystem_id}")
    duplicate = client.post("/api/subsystems", json={"text": "TPC"})
    deleted = client.delete(f"/api/subsystems/{subsystem_id}")

    assert created.status_code == 201
    assert listed.get_json()["meta"] == {"page": {"pageCount": 1, "totalCount": 1}}
    assert fetched.get_json()["data"]["name"] == "TPC"
    assert duplicate.status_code == 409
    assert deleted.status_code == 200
    assert client.get(f"/api/subsystems/{subsystem_id}").status_code == 404


@pytest.mark.unit
def test_api_runs_sort_by_id(client, make_run) -> None:
    runs = [make_run(number) for number in (10, 20, 30)]
    db.session.commit()

    response = client.get("/api/runs", query_string={"sort[id]": "desc"})

    assert response.status_code == 200
    assert [item["id"] for item in response.get_json()["data"]] == [run.id for run in reversed(runs)]
    assert response.get_json()["meta"] == {"page": {"pageCount": 1, "totalCount": 3}}


@pytest.mark.unit
def test_api_runs_rejects_sort_outside_allow_list(client) -> None:
    response = client.get("/api/runs", query_string={"sort[title]": "asc"})

    assert response.status_code == 400
    assert response.get_json()["errors"][0]["source"] == {"pointer": "/data/attributes/query/sort/title"}


@pytest.mark.unit
def test_api_runs_detail(client, make_run) -> None:
    run = make_run(7)
    db.session.commit()

    assert client.get(f"/api/runs/{run.id}").get_json()["data"]["id"] == run.id
    assert client.get("/api/runs/999").status_code == 404
