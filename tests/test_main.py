"""Composition root tests."""

from falcon.testing import TestClient

from dacguard.config import Settings
from dacguard.main import create_dacguard_app


def _settings(**overrides) -> Settings:
    return Settings(
        _env_file=None,
        store_backend="memory",
        directory_backend="static",
        static_users={"u1": "Alice", "u2": "Bob"},
        static_roles={"r1": "Editors"},
        **overrides,
    )


def test_memory_app_round_trip() -> None:
    client = TestClient(create_dacguard_app(_settings()))

    saved = client.simulate_post(
        "/v1/access",
        json={"uri": "doc-1", "privileges": {"u1": ["GRANT"], "r1": ["READ"]}},
    )
    view = client.simulate_get("/v1/access", params={"uri": "doc-1"})

    assert saved.status_code == 200
    assert view.json["version"] == 1
    assert [u["label"] for u in view.json["users"]] == ["Alice"]
    assert [r["label"] for r in view.json["roles"]] == ["Editors"]


def test_custom_catalog_and_legacy_rejection_status() -> None:
    client = TestClient(
        create_dacguard_app(
            _settings(
                privileges=["VIEW", "EDIT", "OWN"],
                privilege_labels={"OWN": "Owner"},
                rejection_status=500,
            )
        )
    )

    privileges = client.simulate_get("/v1/privileges").json
    rejected = client.simulate_post(
        "/v1/access", json={"uri": "doc-1", "privileges": {"u1": ["EDIT"]}}
    )
    accepted = client.simulate_post(
        "/v1/access", json={"uri": "doc-1", "privileges": {"u1": ["OWN"]}}
    )

    assert privileges["manage"] == "OWN"
    assert rejected.status_code == 500
    assert accepted.status_code == 200


def test_keep_last_manager_marks_sole_manager_row() -> None:
    client = TestClient(create_dacguard_app(_settings(keep_last_manager=True)))
    client.simulate_post(
        "/v1/access",
        json={"uri": "doc-1", "privileges": {"u1": ["GRANT"], "r1": ["READ"]}},
    )

    form = client.simulate_get("/v1/access", params={"uri": "doc-1"}).json["form"]

    rows = {r["principal_id"]: r for r in form["rows"]}
    assert rows["u1"]["removable"] is False
    assert rows["u1"]["privileges"]["GRANT"]["locked"] is True
    assert rows["r1"]["removable"] is True
    assert form["available_users"] == {"u2": "Bob"}
