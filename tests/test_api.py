"""Tests for the HTTP API."""
from unittest.mock import patch

from fastapi.testclient import TestClient

from conftest import InMemoryGateway, StubSuggester, make_document

from choreboard.config import Settings, load_settings
from choreboard.main import create_app


class TestState:
    def test_get_state(self, client):
        response = client.get("/api/state")
        assert response.status_code == 200

        data = response.json()
        assert [child["id"] for child in data["children"]] == ["alex", "lea"]
        assert data["children"][0]["avatarId"] == "avatar1"
        assert data["children"][0]["totalEarnings"] == 10
        assert [category["id"] for category in data["categories"]] == ["catA", "catB", "catC"]
        assert data["sync"] == {"status": "saved", "error": None, "persistence_enabled": True}
        assert data["config_error"] is None
        assert data["archive_phase"] == "idle"

    def test_connection(self, client):
        assert client.get("/api/connection").json() == {"connected": True, "metadata": None}

    def test_connection_reports_metadata(self, client, gateway):
        metadata = {"id": "bin123", "name": "chores", "private": True}
        with patch.object(gateway, "metadata", return_value=metadata):
            response = client.get("/api/connection")

        assert response.json() == {"connected": True, "metadata": metadata}

    def test_missing_configuration(self):
        settings = Settings(backend="jsonbin", save_debounce_seconds=0)
        app = create_app(settings, suggester=StubSuggester())

        with TestClient(app) as client:
            data = client.get("/api/state").json()
            assert data["sync"]["status"] == "error"
            assert data["sync"]["persistence_enabled"] is False
            assert "JSONBIN_BIN_ID" in data["config_error"]
            assert [child["id"] for child in data["children"]] == ["child1", "child2", "child3"]
            assert client.get("/api/connection").json() == {"connected": False, "metadata": None}

    def test_invalid_environment_values_do_not_stop_startup(self):
        settings = load_settings(
            {"CHOREBOARD_SAVE_DEBOUNCE": "1s", "CHOREBOARD_LOG_LEVEL": "verbose", "CHOREBOARD_DATABASE_URL": "sqlite://"}
        )
        app = create_app(settings, gateway=InMemoryGateway(make_document()), suggester=StubSuggester())

        with TestClient(app) as client:
            assert client.get("/api/state").json()["sync"]["status"] == "saved"
        assert settings.save_debounce_seconds == 1.0
        assert settings.log_level == "INFO"


class TestAppFactory:
    def test_import_builds_no_app(self):
        import choreboard.main as main

        assert not hasattr(main, "app")

    def test_factory_uses_environment(self, monkeypatch):
        monkeypatch.setenv("CHOREBOARD_BACKEND", "sqlite")
        monkeypatch.setenv("CHOREBOARD_DATABASE_URL", "sqlite://")
        monkeypatch.setenv("CHOREBOARD_SAVE_DEBOUNCE", "0")

        with TestClient(create_app(suggester=StubSuggester())) as client:
            data = client.get("/api/state").json()

        assert [child["id"] for child in data["children"]] == ["child1", "child2", "child3"]
        assert data["sync"]["persistence_enabled"] is True


class TestChildActions:
    def test_mark_reports_reward(self, client, gateway):
        response = client.post("/api/child/alex/chores/catA/mark")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "reward_earned": 2}
        assert gateway.document["children"][0]["chores"] == {"catA": 3, "catB": 2}

    def test_mark_without_crossing(self, client):
        client.post("/api/child/alex/chores/catA/mark")
        response = client.post("/api/child/alex/chores/catA/mark")
        assert response.json() == {"status": "ok", "reward_earned": None}

    def test_mark_unknown_ids_is_noop(self, client, gateway):
        assert client.post("/api/child/nobody/chores/catA/mark").status_code == 200
        assert client.post("/api/child/alex/chores/nope/mark").status_code == 200
        assert gateway.writes == []

    def test_unmark(self, client, gateway):
        client.post("/api/child/lea/chores/catA/mark")
        response = client.post("/api/child/lea/chores/catA/unmark")

        assert response.status_code == 200
        assert gateway.document["children"][1]["chores"] == {}

    def test_update_child(self, client):
        response = client.patch("/api/child/alex", json={"name": "Alexandre", "avatar_id": "avatar4"})
        assert response.status_code == 200

        child = client.get("/api/state").json()["children"][0]
        assert child["name"] == "Alexandre"
        assert child["avatarId"] == "avatar4"

    def test_update_total(self, client):
        client.patch("/api/child/lea", json={"total_earnings": 25.5})
        assert client.get("/api/state").json()["children"][1]["totalEarnings"] == 25.5

    def test_update_unknown_child(self, client):
        response = client.patch("/api/child/nobody", json={"name": "X"})
        assert response.status_code == 404
        assert response.json()["detail"] == "Child not found"


class TestCategories:
    def test_create(self, client):
        response = client.post("/api/categories", json={"name": "Feed the cat"})

        assert response.status_code == 200
        assert response.json()["name"] == "Feed the cat"
        assert response.json()["id"].startswith("cat-")

    def test_create_blank(self, client):
        assert client.post("/api/categories", json={"name": "   "}).status_code == 400
        assert client.post("/api/categories", json={"name": ""}).status_code == 422

    def test_delete_needs_confirmation(self, client):
        response = client.delete("/api/categories/catA")

        assert response.status_code == 400
        assert response.json()["detail"] == 'Confirm deletion of chore "Set the table"'
        assert len(client.get("/api/state").json()["categories"]) == 3

    def test_delete_confirmed(self, client):
        response = client.delete("/api/categories/catA", params={"confirm": "true"})
        assert response.status_code == 200

        data = client.get("/api/state").json()
        assert [category["id"] for category in data["categories"]] == ["catB", "catC"]
        assert data["children"][0]["chores"] == {"catB": 2}

    def test_delete_unknown(self, client):
        assert client.delete("/api/categories/missing", params={"confirm": "true"}).status_code == 200


class TestWeekArchive:
    def test_archive_workflow(self, client):
        client.post("/api/child/alex/chores/catA/mark")

        response = client.post("/api/week/archive")
        assert response.json() == {"status": "ok", "archive_phase": "confirming"}

        summary = client.post("/api/week/archive/confirm").json()["summary"]
        assert summary[0] == {
            "child_id": "alex",
            "name": "Alex",
            "total_chores": 5,
            "earnings": 2,
            "new_total_earnings": 12,
        }
        assert client.get("/api/state").json()["children"][0]["chores"] == {"catA": 3, "catB": 2}

        children = client.post("/api/week/archive/finalize").json()["children"]
        assert children[0]["chores"] == {}
        assert children[0]["totalEarnings"] == 12
        assert children[0]["archive"][0] == {"weekOf": "October 19, 2026", "totalChores": 5, "earnings": 2}
        assert children[1]["totalEarnings"] == 10
        assert len(children[1]["archive"]) == 1

    def test_finalize_without_summary(self, client):
        response = client.post("/api/week/archive/finalize")
        assert response.status_code == 400
        assert response.json()["detail"] == "Week summary has not been shown"

    def test_changes_refused_until_finalized(self, client, gateway):
        client.post("/api/week/archive")
        summary = client.post("/api/week/archive/confirm").json()["summary"]

        response = client.post("/api/child/alex/chores/catA/mark")
        assert response.status_code == 400
        assert response.json()["detail"] == "Week archive in progress"
        assert client.post("/api/child/alex/chores/catA/unmark").status_code == 400
        assert client.patch("/api/child/alex", json={"total_earnings": 50}).status_code == 400
        assert client.delete("/api/categories/catA", params={"confirm": "true"}).status_code == 400
        assert gateway.writes == []

        children = client.post("/api/week/archive/finalize").json()["children"]
        assert [child["totalEarnings"] for child in children] == [row["new_total_earnings"] for row in summary]

    def test_cancel(self, client):
        client.post("/api/week/archive")
        assert client.post("/api/week/archive/cancel").status_code == 200
        assert client.get("/api/state").json()["archive_phase"] == "idle"


class TestSuggestion:
    def test_suggestion(self, client):
        assert client.get("/api/suggestion").json() == {"name": "Water the plants"}
