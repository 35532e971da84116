"""
Fixtures shared by the unit tests.
"""

import os

import pytest


@pytest.fixture(autouse=True)
def clean_cartpilot_env(monkeypatch):
    """Keep CARTPILOT_* variables from the calling shell out of settings."""
    for name in list(os.environ):
        if name.upper().startswith("CARTPILOT_"):
            monkeypatch.delenv(name)
