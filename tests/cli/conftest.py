"""Shared fixtures for CLI execution tests."""

from __future__ import annotations

import logging

import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:  # type: ignore[no-untyped-def]
    """Keep ``RESTCOV_*`` variables and any ``.env`` file out of CLI runs."""
    for key in (
        "RESTCOV_SWAGGER_PATH",
        "RESTCOV_AUDIT_LOG_PATH",
        "RESTCOV_FILTER",
        "RESTCOV_OUTPUT_PATH",
        "RESTCOV_OUTPUT_FORMAT",
        "RESTCOV_DETAILED",
        "RESTCOV_IGNORE_RESOURCE_VERSION",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def restore_logging():  # type: ignore[no-untyped-def]
    """Undo the root handler the CLI installs."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
