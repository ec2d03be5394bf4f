from __future__ import annotations

import logging
import os
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path


def _resolve_log_dir(settings: object) -> Path | None:
    """Resolve the log directory.

    - If DOCS_LOG_DIR is unset/empty, file logging is disabled.
    - If it is absolute, use it directly.
    - Otherwise, treat it as relative to the working directory.

    Logs never default into the docs tree being checked.
    """

    raw = getattr(settings, "DOCS_LOG_DIR", None)
    if raw is None or str(raw).strip() == "":
        return None
    p = raw if isinstance(raw, Path) else Path(str(raw))
    if p.is_absolute():
        return p

    return Path.cwd() / p


def setup_logging(settings: object) -> Path | None:
    """Configure logging for a CLI run.

    Returns the resolved log file path (None when file logging is off).

    - The file log rotates at midnight and keeps `DOCS_LOG_BACKUP_COUNT` files.
    - The console handler writes WARNING and above to stderr; stdout is the report.
    - Safe to call multiple times (it resets handlers).
    """

    level_name = str(getattr(settings, "DOCS_LOG_LEVEL", "INFO") or "INFO").upper().strip()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

    root = logging.getLogger("argus_docs")
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    root.setLevel(level)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(max(level, logging.WARNING))
    console_handler.setFormatter(logging.Formatter(fmt))
    root.addHandler(console_handler)

    log_dir = _resolve_log_dir(settings)
    if log_dir is None:
        return None

    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "argus_docs.log"

    file_handler = TimedRotatingFileHandler(
        filename=str(log_file),
        when="midnight",
        interval=1,
        backupCount=max(0, int(getattr(settings, "DOCS_LOG_BACKUP_COUNT", 14) or 0)),
        encoding="utf-8",
        utc=False,
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(fmt))
    root.addHandler(file_handler)

    root.info("argus_docs logging enabled (file=%s, level=%s)", os.fspath(log_file), level_name)
    return log_file
