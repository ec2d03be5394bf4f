from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .config import DocsConfig


class SyncStatus(str, Enum):
    SYNCED = "synced"
    BLOCKED = "blocked"
    MISSING = "missing"
    FAILED = "failed"


@dataclass(frozen=True)
class SyncOutcome:
    source: str
    destination: str
    status: SyncStatus
    detail: str = ""


@dataclass
class SyncReport:
    outcomes: list[SyncOutcome] = field(default_factory=list)

    def _count(self, status: SyncStatus) -> int:
        return sum(1 for o in self.outcomes if o.status is status)

    @property
    def synced(self) -> int:
        return self._count(SyncStatus.SYNCED)

    @property
    def blocked(self) -> int:
        return self._count(SyncStatus.BLOCKED)

    @property
    def missing(self) -> int:
        return self._count(SyncStatus.MISSING)

    @property
    def failed(self) -> int:
        return self._count(SyncStatus.FAILED)

    @property
    def stats(self) -> dict[str, int]:
        return {s.value: self._count(s) for s in SyncStatus}

    def summary_line(self) -> str:
        line = f"📊 Summary: {self.synced} synced, {self.blocked} blocked, {self.missing} missing"
        if self.failed:
            line += f", {self.failed} failed"
        return line


class SyncEngine:
    """Copy approved source files into the docs tree.

    Every destination is overwritten wholesale with the source bytes. There is
    no diffing or merging: the last write wins.
    """

    def __init__(self, config: DocsConfig, docs_root: str | Path, logger: logging.Logger | None = None):
        self.config = config
        self.docs_root = Path(docs_root)
        self.logger = logger or logging.getLogger("argus_docs.sync")

    def _destination_path(self, dest: str) -> Path | None:
        root = self.docs_root.resolve()
        target = (root / dest.replace("\\", "/").lstrip("/")).resolve()
        if target != root and root not in target.parents:
            return None
        return target

    def sync_one(self, source: str, dest: str, *, dry_run: bool = False) -> SyncOutcome:
        if self.config.is_junk(source):
            self.logger.info("Blocked junk source: %s", source)
            return SyncOutcome(source, dest, SyncStatus.BLOCKED)

        src_path = Path(source)
        if not src_path.is_file():
            self.logger.warning("Source missing, skipped: %s", source)
            return SyncOutcome(source, dest, SyncStatus.MISSING)

        target = self._destination_path(dest)
        if target is None:
            self.logger.error("Destination escapes docs root: %s", dest)
            return SyncOutcome(source, dest, SyncStatus.FAILED, "destination outside docs root")

        try:
            content = src_path.read_bytes()
            if not dry_run:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_bytes(content)
        except OSError as e:
            self.logger.warning("Sync failed for %s -> %s: %s", source, dest, e)
            return SyncOutcome(source, dest, SyncStatus.FAILED, str(e))

        self.logger.info(
            "%s %s -> %s (%d bytes)", "Would sync" if dry_run else "Synced", source, target, len(content)
        )
        return SyncOutcome(source, dest, SyncStatus.SYNCED)

    def run(self, *, dry_run: bool = False) -> SyncReport:
        self.logger.info(
            "--- Syncing %d approved sources into %s (Dry Run: %s) ---",
            len(self.config.sources),
            self.docs_root,
            dry_run,
        )
        report = SyncReport()
        for source, dest in self.config.sources.items():
            report.outcomes.append(self.sync_one(source, dest, dry_run=dry_run))
        self.logger.info("Run Summary: %s", report.stats)
        return report
