from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping

import yaml

from .errors import ConfigError

logger = logging.getLogger("argus_docs.config")


APPROVED_SOURCES: Mapping[str, str] = MappingProxyType(
    {
        "/mnt/development/README.md": "guide/index.md",
        "/mnt/development/AI_MASTER_GUIDE.md": "guide/ai-guide.md",
        "/mnt/development/CODING_GUIDELINES.md": "guide/coding-guidelines.md",
        "/mnt/development/TYPE_SAFETY_RULES.md": "guide/type-safety.md",
        "/mnt/development/I18N_AND_ACCESSIBILITY_REQUIREMENTS.md": "guide/accessibility.md",
        "/mnt/development/DATABASE_CONNECTION_GUIDE.md": "guide/database.md",
        "/mnt/development/CLOUDFLARE_MANAGEMENT_GUIDE.md": "guide/deployment.md",
    }
)

BLOCKED_PATTERNS: tuple[str, ...] = (
    "SUMMARY",
    "COMPLETE",
    "FIXES",
    "SESSION",
    "PROMPT",
    "STATUS",
    "AUDIT",
    "VERIFICATION",
)

VALIDATION_ROOTS: frozenset[str] = frozenset({"guide", "api", "components"})
ROOT_FILES: frozenset[str] = frozenset({"index.md"})
IGNORE_DIRS: frozenset[str] = frozenset({"node_modules", ".git", ".github", ".vscode", "_logs"})

STRICT_REQUIRED_FIELDS: tuple[str, ...] = ("title", "description")


def compile_patterns(patterns: Iterable[str]) -> tuple[re.Pattern[str], ...]:
    compiled = []
    for p in patterns:
        try:
            compiled.append(re.compile(str(p), re.IGNORECASE))
        except re.error as e:
            raise ConfigError(f"Invalid blocked pattern {p!r}: {e}") from e
    return tuple(compiled)


def is_junk_filename(filename: str, patterns: Iterable[re.Pattern[str]]) -> bool:
    """True when the bare filename matches any blocked pattern.

    Only the last path component is tested; directories never count.
    """

    name = Path(str(filename).replace("\\", "/")).name
    return any(p.search(name) for p in patterns)


@dataclass(frozen=True)
class DocsConfig:
    """Static tables for one run. Built once at startup, never mutated."""

    sources: Mapping[str, str] = field(default_factory=lambda: APPROVED_SOURCES)
    blocked_patterns: tuple[re.Pattern[str], ...] = field(
        default_factory=lambda: compile_patterns(BLOCKED_PATTERNS)
    )
    validation_roots: frozenset[str] = VALIDATION_ROOTS
    root_files: frozenset[str] = ROOT_FILES
    ignore_dirs: frozenset[str] = IGNORE_DIRS
    required_fields: tuple[str, ...] = STRICT_REQUIRED_FIELDS
    check_links: bool = True

    def is_junk(self, filename: str) -> bool:
        return is_junk_filename(filename, self.blocked_patterns)

    def with_overrides(
        self,
        *,
        strict: bool | None = None,
        check_links: bool | None = None,
    ) -> "DocsConfig":
        """Return a copy with the CLI/settings toggles applied."""

        cfg = self
        if strict is not None:
            # `title` is always required; strict mode adds `description`.
            fields = tuple(f for f in cfg.required_fields if f != "description")
            if "title" not in fields:
                fields = ("title",) + fields
            if strict:
                fields += ("description",)
            cfg = replace(cfg, required_fields=fields)
        if check_links is not None:
            cfg = replace(cfg, check_links=check_links)
        return cfg


def _str_list(raw: object, key: str) -> list[str]:
    if not isinstance(raw, list) or not all(isinstance(x, str) and x.strip() for x in raw):
        raise ConfigError(f"'{key}' must be a list of non-empty strings")
    return [x.strip() for x in raw]


def load_docs_config(path: str | Path | None = None) -> DocsConfig:
    """Load the static tables, optionally overlaid by a YAML file.

    Recognised top-level keys: ``sources``, ``blocked_patterns``,
    ``validation_roots``, ``root_files``, ``ignore_dirs``, ``required_fields``.
    Keys that are absent keep their built-in defaults.
    """

    if path is None:
        return DocsConfig()

    p = Path(path)
    if not p.is_file():
        raise ConfigError(f"Config file not found: {p}")

    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {p}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Could not read {p}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{p}: top level must be a mapping")

    overrides: dict[str, object] = {}

    if "sources" in data:
        raw = data["sources"] or {}
        if not isinstance(raw, dict):
            raise ConfigError("'sources' must map source paths to destination paths")
        sources: dict[str, str] = {}
        for src, dest in raw.items():
            if not isinstance(src, str) or not isinstance(dest, str) or not dest.strip():
                raise ConfigError(f"Invalid source mapping: {src!r} -> {dest!r}")
            sources[src] = dest.strip()
        overrides["sources"] = MappingProxyType(sources)

    if "blocked_patterns" in data:
        overrides["blocked_patterns"] = compile_patterns(
            _str_list(data["blocked_patterns"], "blocked_patterns")
        )
    if "validation_roots" in data:
        overrides["validation_roots"] = frozenset(
            x.strip("/") for x in _str_list(data["validation_roots"], "validation_roots")
        )
    if "root_files" in data:
        overrides["root_files"] = frozenset(_str_list(data["root_files"], "root_files"))
    if "ignore_dirs" in data:
        overrides["ignore_dirs"] = frozenset(_str_list(data["ignore_dirs"], "ignore_dirs"))
    if "required_fields" in data:
        overrides["required_fields"] = tuple(_str_list(data["required_fields"], "required_fields"))

    logger.info("Loaded docs config from %s (keys: %s)", p, sorted(overrides))
    return replace(DocsConfig(), **overrides)
