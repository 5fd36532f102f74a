"""
Tests for descriptions.py

Validates:
- documents load from files and URLs into description entries
- documents without a records list are rejected before generation
- loaded sources feed the driver like any other host source

URL loading is exercised against a monkeypatched ``requests.get``.
"""

import json
import logging

import pytest
import requests

from beanerator import descriptions
from beanerator.codegen import GenerationDriver, MemoryWriter, get_generator
from beanerator.descriptions import (
    DescriptionLoadError,
    is_description_location,
    is_url,
    load_description_source,
    load_descriptions,
)


class FakeResponse:
    def __init__(self, payload=None, status_code=200, content_type="application/json", text=None):
        self.payload = payload
        self.status_code = status_code
        self.headers = {"content-type": content_type}
        self.text = text

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code}", response=self)

    def json(self):
        if self.text is not None:
            return json.loads(self.text)
        return self.payload


@pytest.fixture
def document(describe):
    return {
        "records": [
            describe("shop.Item", [("name", "str"), ("price", "shop.Price")]),
            describe("shop.Price", [("amount", "int")]),
            {"name": "shop.Note", "kind": "class"},
        ]
    }


def write(tmp_path, content, name="records.json"):
    path = tmp_path / name
    path.write_text(content if isinstance(content, str) else json.dumps(content), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------


def test_load_from_file(tmp_path, document):
    entries = load_descriptions(write(tmp_path, document))
    assert [entry["name"] for entry in entries] == ["shop.Item", "shop.Price", "shop.Note"]


def test_bare_list_document(tmp_path, describe):
    entries = load_descriptions(write(tmp_path, [describe("shop.Item", [])]))
    assert entries[0]["name"] == "shop.Item"


@pytest.mark.parametrize(
    "content, message",
    [
        ("{not json", "Invalid JSON"),
        ({"records": "shop.Item"}, "no 'records' list"),
        ('"shop.Item"', "must be an object or a list"),
    ],
)
def test_invalid_documents(tmp_path, content, message):
    with pytest.raises(DescriptionLoadError, match=message):
        load_descriptions(write(tmp_path, content))


def test_missing_file(tmp_path):
    with pytest.raises(DescriptionLoadError, match="File not found"):
        load_descriptions(tmp_path / "missing.json")


def test_duplicate_records_are_reported(tmp_path, describe, caplog, monkeypatch):
    # The CLI stops propagation once it has set up logging
    monkeypatch.setattr(logging.getLogger("beanerator"), "propagate", True)
    path = write(tmp_path, [describe("shop.Item", []), describe("shop.Item", [])])
    with caplog.at_level(logging.WARNING, logger="beanerator.descriptions"):
        load_descriptions(path)
    assert "Record shop.Item is described 2 times" in caplog.text


def test_loaded_source_runs_through_the_driver(tmp_path, document, diagnostics):
    source = load_description_source(write(tmp_path, document))
    writer = MemoryWriter()
    results = GenerationDriver(get_generator("python"), writer, diagnostics).run(source)

    assert [r.host for r in results] == ["shop.Item", "shop.Price"]
    assert all(r.success for r in results)
    assert list(writer.sources) == [("shop", "PriceBean"), ("shop", "ItemBean")]


# ---------------------------------------------------------------------------
# URLs
# ---------------------------------------------------------------------------


def test_load_from_url(monkeypatch, document):
    calls = []

    def fake_get(url, timeout):
        calls.append((url, timeout))
        return FakeResponse(document)

    monkeypatch.setattr(descriptions.requests, "get", fake_get)

    entries = load_descriptions("https://example.com/records.json", timeout=5)
    assert len(entries) == 3
    assert calls == [("https://example.com/records.json", 5)]


@pytest.mark.parametrize(
    "response, message",
    [
        (FakeResponse(status_code=404), "HTTP error 404"),
        (FakeResponse(text="<html>", content_type="text/html"), "Invalid JSON response"),
        (FakeResponse({"items": []}), "no 'records' list"),
    ],
)
def test_bad_url_responses(monkeypatch, response, message):
    monkeypatch.setattr(descriptions.requests, "get", lambda url, timeout: response)
    with pytest.raises(DescriptionLoadError, match=message):
        load_descriptions("https://example.com/records")


def test_url_timeout(monkeypatch):
    def fake_get(url, timeout):
        raise requests.exceptions.Timeout()

    monkeypatch.setattr(descriptions.requests, "get", fake_get)
    with pytest.raises(DescriptionLoadError, match="timeout"):
        load_descriptions("https://example.com/records.json")


# ---------------------------------------------------------------------------
# Locations
# ---------------------------------------------------------------------------


def test_is_url():
    assert is_url("https://example.com/records.json")
    assert is_url("http://localhost:8000/r")
    assert not is_url("records.json")
    assert not is_url("beanerator.demo.coffee")


def test_is_description_location(tmp_path):
    existing = write(tmp_path, [], name="records")
    assert is_description_location("https://example.com/records")
    assert is_description_location("missing.json")
    assert is_description_location(str(existing))
    assert not is_description_location("beanerator.demo.coffee")
