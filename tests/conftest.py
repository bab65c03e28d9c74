"""Shared test fixtures."""

import os

import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's environment out of configuration tests."""
    for name in list(os.environ):
        if name.startswith("RAG_CHUNKER_") or name == "OPENAI_API_KEY":
            monkeypatch.delenv(name, raising=False)
