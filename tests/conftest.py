"""Pytest configuration and fixtures."""

import json
import tempfile
from datetime import datetime, timezone
from pathlib import Path

import pytest

from json_codable import CodableAdapter


DOG_JSON = {"pet_kind": "dog", "name": "agnes"}
CAT_JSON = {"pet_kind": "cat", "name": "winston"}
BIRD_JSON = {"pet_kind": "other", "name": "peachy bird"}

KID_JSON = {
    "full_name": "Devon Redfern",
    "age": 6,
    "gender": "female",
    "date_of_birth": "3/24/1992",
    "personalWebsite": "https://mulesoft.com",
    "kids": [],
}


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def adapter():
    """A fresh adapter with its own date format registry."""
    return CodableAdapter()


@pytest.fixture
def person_json():
    """Person document with nested pets, kids and a custom date format."""
    return {
        "full_name": "Jeff Hurray",
        "age": 24,
        "gender": "male",
        "date_of_birth": "10/25/1992",
        "personalWebsite": "https://google.com",
        "pet_thing": dict(DOG_JSON),
        "kids": [dict(KID_JSON), dict(KID_JSON)],
        "pets": [dict(CAT_JSON), dict(BIRD_JSON)],
    }


@pytest.fixture
def person_json_string(person_json):
    return json.dumps(person_json)


@pytest.fixture
def tree_json():
    """Tree document with a path into a nested list and a remapped date."""
    return {
        "tree_names": {
            "colloquial": ["pine", "big green"],
            "scientific": "piniferous scientificus",
        },
        "age": 121,
        "family": 1,
        "planted": "7-4-1896",
        "leaves": [
            {"size": "large", "isAttached": True},
            {"size": "small", "isAttached": False},
        ],
    }


@pytest.fixture
def keypath_json():
    """Mixed object and array document for key path lookups."""
    return {
        "start": [
            "harry",
            "potter",
            {
                "foo": 33.3,
                "bar": ["yes", "no", "maybe"],
                "fizz": {
                    "type": "algo",
                    "values": [1, 3, 5],
                },
            },
        ]
    }


@pytest.fixture
def reference_date():
    """Midnight UTC on 25 October 1992."""
    return datetime(1992, 10, 25, tzinfo=timezone.utc)
