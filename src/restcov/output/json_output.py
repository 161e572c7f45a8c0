"""JSON envelopes for command results and errors."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel

from restcov import __version__


def _serialize(obj: Any) -> Any:
    """Convert *obj* to a JSON-friendly structure.

    Models are dumped under their camelCase aliases, so a report inside an
    envelope has the same field names as one written with ``--output-path``.
    Containers are walked; anything else is left to ``json.dumps``.
    """
    if isinstance(obj, BaseModel):
        return obj.model_dump(by_alias=True, exclude_none=True)
    if isinstance(obj, (list, tuple)):
        return [_serialize(item) for item in obj]
    if isinstance(obj, dict):
        return {key: _serialize(value) for key, value in obj.items()}
    return obj


def _envelope(ok: bool, command: str, **body: Any) -> str:
    envelope: dict[str, Any] = {
        "ok": ok,
        "command": command,
        **body,
        "version": __version__,
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return json.dumps(envelope, indent=2, default=str)


def format_json_response(*, data: Any, command: str) -> str:
    """Return the success envelope ``{ok, command, data, version, timestamp}``."""
    return _envelope(True, command, data=_serialize(data))


def format_json_error(
    *,
    code: str,
    message: str,
    command: str,
    **extra: Any,
) -> str:
    """Return the error envelope ``{ok: false, command, error, version, timestamp}``.

    *extra* keyword arguments are merged into the ``error`` object next to
    ``code`` and ``message``.
    """
    return _envelope(False, command, error={"code": code, "message": message, **extra})
