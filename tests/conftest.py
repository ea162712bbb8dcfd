import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from json_server.domain.models import ResourceIndex, ServerConfig
from json_server.main import create_app
from json_server.storage.resource_index import build_index


ARTICLES = {
    "links": {"self": "http://example.com/articles"},
    "data": [
        {
            "type": "articles",
            "id": "1",
            "attributes": {"title": "JSON:API paints my bikeshed!"},
            "relationships": {"author": {"data": {"type": "people", "id": "9"}}},
        }
    ],
    "included": [
        {"type": "people", "id": "9", "attributes": {"firstName": "Dan", "lastName": "Gebhardt"}}
    ],
}

STARWARS = {
    "name": "Luke Skywalker",
    "height": "172",
    "mass": "77",
    "hair_color": "blond",
    "films": ["https://swapi.dev/api/films/1/", "https://swapi.dev/api/films/2/"],
}

NESTED_TEXT = """{
    "data": {
        "nested": {
            "value": 42
        },
        "array": [1, 2, 3]
    }
}"""


@pytest.fixture()
def data_dir(tmp_path: Path) -> Path:
    """A data directory holding articles.json, starwars.json and nested.json."""
    d = tmp_path / "data"
    d.mkdir()
    (d / "articles.json").write_text(json.dumps(ARTICLES), encoding="utf-8")
    (d / "starwars.json").write_text(json.dumps(STARWARS), encoding="utf-8")
    (d / "nested.json").write_text(NESTED_TEXT, encoding="utf-8")
    return d


@pytest.fixture()
def server_config(data_dir: Path) -> ServerConfig:
    return ServerConfig(data_dir=data_dir, index=build_index(data_dir))


@pytest.fixture()
def client(server_config: ServerConfig):
    with TestClient(create_app(server_config)) as c:
        yield c


@pytest.fixture()
def make_client():
    """Factory for clients over an arbitrary directory and index."""
    clients = []

    def _make(data_dir: Path, names=None) -> TestClient:
        index = build_index(data_dir) if names is None else ResourceIndex(names=tuple(names))
        c = TestClient(create_app(ServerConfig(data_dir=data_dir, index=index)))
        c.__enter__()
        clients.append(c)
        return c

    yield _make

    for c in clients:
        c.__exit__(None, None, None)
