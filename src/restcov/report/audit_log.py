"""Lazy reader for JSON-lines audit logs."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError

from restcov.errors import AuditLogError
from restcov.models.audit import AuditEvent

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)


def iter_audit_events(path: str | Path) -> Iterator[tuple[int, AuditEvent]]:
    """Yield ``(line_number, event)`` for each record in the log at *path*.

    Records are read one line at a time; blank lines are skipped.  A line
    that is not a valid audit event raises :class:`AuditLogError`.
    """
    p = Path(path).expanduser()
    try:
        fh = p.open("rb")
    except OSError as exc:
        raise AuditLogError(f"Cannot read audit log: {exc}") from exc

    with fh:
        for line_no, line in enumerate(fh, start=1):
            if not line.strip():
                continue
            try:
                text = line.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise AuditLogError(f"Audit event is not valid UTF-8: {exc}", line=line_no) from exc
            try:
                event = AuditEvent.model_validate_json(text)
            except ValidationError as exc:
                raise AuditLogError(f"Malformed audit event: {exc}", line=line_no) from exc
            yield line_no, event
    logger.debug("Finished reading %s", p)
