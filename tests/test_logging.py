from __future__ import annotations

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from argus_docs.logging import _resolve_log_dir, setup_logging
from argus_docs.settings import Settings


class _Settings:
    def __init__(self, root: Path, log_dir):
        self.DOCS_ROOT = root
        self.DOCS_LOG_DIR = log_dir
        self.DOCS_LOG_LEVEL = "debug"
        self.DOCS_LOG_BACKUP_COUNT = 3


def test_resolve_log_dir_is_relative_to_cwd(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    docs = tmp_path / "docs"
    assert _resolve_log_dir(_Settings(docs, None)) is None
    assert _resolve_log_dir(_Settings(docs, "")) is None
    assert _resolve_log_dir(_Settings(docs, Path("_logs"))) == tmp_path / "_logs"
    assert _resolve_log_dir(_Settings(docs, "_logs")) == tmp_path / "_logs"
    assert _resolve_log_dir(_Settings(docs, tmp_path / "abs")) == tmp_path / "abs"


def test_setup_logging_is_repeatable(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    s = _Settings(tmp_path, Path("_logs"))
    first = setup_logging(s)
    second = setup_logging(s)
    assert first == second == tmp_path / "_logs" / "argus_docs.log"

    lg = logging.getLogger("argus_docs")
    assert lg.level == logging.DEBUG
    assert len(lg.handlers) == 2
    assert sum(isinstance(h, TimedRotatingFileHandler) for h in lg.handlers) == 1

    logging.getLogger("argus_docs.sync").info("hello from sync")
    assert "hello from sync" in first.read_text(encoding="utf-8")


def test_setup_logging_console_only(tmp_path: Path):
    assert setup_logging(_Settings(tmp_path, None)) is None
    lg = logging.getLogger("argus_docs")
    assert len(lg.handlers) == 1
    assert lg.handlers[0].level == logging.WARNING


def test_settings_from_env(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("DOCS_ROOT", str(tmp_path / "site"))
    monkeypatch.setenv("DOCS_STRICT", "false")
    monkeypatch.setenv("DOCS_LOG_DIR", "")
    s = Settings()
    assert s.DOCS_ROOT == tmp_path / "site"
    assert s.DOCS_STRICT is False
    assert s.DOCS_LOG_DIR is None
    assert s.DOCS_CONFIG is None
    assert s.DOCS_CHECK_LINKS is True


def test_file_log_is_off_by_default(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("DOCS_LOG_DIR", raising=False)
    s = Settings()
    assert s.DOCS_LOG_DIR is None
    assert setup_logging(s) is None
    assert list(tmp_path.iterdir()) == []
