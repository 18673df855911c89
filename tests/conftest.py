"""Shared fixtures for chore board tests."""
import datetime

import pytest
from fastapi.testclient import TestClient

from choreboard.config import Settings
from choreboard.data.gateway import DocumentGateway, PersistenceError
from choreboard.domain.services import BoardService
from choreboard.main import create_app
from choreboard.schemas.board import Category, Child

TODAY = datetime.date(2026, 10, 19)


class InMemoryGateway(DocumentGateway):
    """Document store kept in a dict, with switchable failures."""

    name = "memory"

    def __init__(self, document=None):
        super().__init__()
        self.document = document
        self.writes = []
        self.fail_reads = False
        self.fail_writes = False

    def fetch_document(self):
        if self.fail_reads:
            raise PersistenceError("store unreachable")
        return self.document

    def write_document(self, document):
        if self.fail_writes:
            raise PersistenceError("write rejected")
        self.document = document
        self.writes.append(document)


class StubSuggester:
    enabled = True

    def suggest(self):
        return "Water the plants"


def make_document():
    return {
        "children": [
            {
                "id": "alex",
                "name": "Alex",
                "avatarId": "avatar1",
                "chores": {"catA": 2, "catB": 2},
                "totalEarnings": 10,
                "archive": [],
            },
            {
                "id": "lea",
                "name": "Lea",
                "avatarId": "avatar2",
                "chores": {},
                "totalEarnings": 10,
                "archive": [{"weekOf": "October 12, 2026", "totalChores": 6, "earnings": 2}],
            },
        ],
        "categories": [
            {"id": "catA", "name": "Set the table"},
            {"id": "catB", "name": "Clear the table"},
            {"id": "catC", "name": "Tidy your room"},
        ],
    }


@pytest.fixture
def categories():
    return [
        Category(id="catA", name="Set the table"),
        Category(id="catB", name="Clear the table"),
        Category(id="catC", name="Tidy your room"),
    ]


@pytest.fixture
def alex():
    return Child(id="alex", name="Alex", avatar_id="avatar1", chores={"catA": 2, "catB": 2}, total_earnings=10)


@pytest.fixture
def gateway():
    return InMemoryGateway(make_document())


@pytest.fixture
def board(gateway):
    service = BoardService(gateway, save_delay=0, today=lambda: TODAY)
    service.load()
    gateway.writes.clear()
    return service


@pytest.fixture
def client(gateway):
    settings = Settings(save_debounce_seconds=0)
    app = create_app(settings, gateway=gateway, suggester=StubSuggester())
    app.state.board._today = lambda: TODAY
    with TestClient(app) as test_client:
        gateway.writes.clear()
        yield test_client
