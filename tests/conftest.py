"""Shared fixtures. app.py configures logging at import, keep it off disk."""

import os

os.environ["CAF_LOG_FILE"] = ""

import pytest

from config import Settings


@pytest.fixture()
def settings() -> Settings:
    return Settings(openai_api_key="sk-test", log_file="")


@pytest.fixture()
def two_hits():
    return [
        {"snippet": "A", "link": "http://a"},
        {"snippet": "B", "link": "http://b"},
    ]


@pytest.fixture()
def two_citations():
    return {"[1]": "http://a", "[2]": "http://b"}
