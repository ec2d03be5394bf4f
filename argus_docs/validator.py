from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from . import errors
from .config import DocsConfig
from .errors import ValidationError
from .markdown import extract_frontmatter, has_field, is_well_formed_target, iter_links, read_markdown

logger = logging.getLogger("argus_docs.validator")


@dataclass(frozen=True)
class DocFile:
    full_path: Path
    rel_path: str  # posix-style, relative to the scanned root

    @property
    def filename(self) -> str:
        return PurePosixPath(self.rel_path).name


@dataclass
class ValidationReport:
    files_checked: int = 0
    results: dict[str, list[ValidationError]] = field(default_factory=dict)

    @property
    def total_errors(self) -> int:
        return sum(len(v) for v in self.results.values())

    @property
    def ok(self) -> bool:
        return self.total_errors == 0

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "files_checked": self.files_checked,
            "total_errors": self.total_errors,
            "files": {path: [e.to_dict() for e in errs] for path, errs in self.results.items()},
        }


def should_validate(rel_path: str, config: DocsConfig) -> bool:
    parts = PurePosixPath(rel_path).parts
    if not parts:
        return False
    if len(parts) > 1 and parts[0] in config.validation_roots:
        return True
    return rel_path in config.root_files


def _log_walk_error(err: OSError) -> None:
    logger.warning("Could not scan %s: %s", err.filename, err)


def find_markdown_files(root: str | Path, config: DocsConfig) -> list[DocFile]:
    """Collect markdown files under the allowed roots, in stable order."""

    root = Path(root)
    found: list[DocFile] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=_log_walk_error):
        dirnames[:] = sorted(
            d for d in dirnames if d not in config.ignore_dirs and not d.startswith(".")
        )
        for name in sorted(filenames):
            if not name.endswith(".md"):
                continue
            full = Path(dirpath) / name
            rel = full.relative_to(root).as_posix()
            if should_validate(rel, config):
                found.append(DocFile(full_path=full, rel_path=rel))
    return found


def check_document(filename: str, content: str, config: DocsConfig) -> list[ValidationError]:
    """Pure check of one file's name and text. Returns every problem found."""

    found: list[ValidationError] = []

    if config.is_junk(filename):
        found.append(errors.junk_filename(PurePosixPath(filename.replace("\\", "/")).name))

    block = extract_frontmatter(content)
    if block is None:
        found.append(errors.missing_frontmatter())
    else:
        for name in config.required_fields:
            if not has_field(block, name):
                found.append(errors.missing_field(name))

    if config.check_links:
        for link in iter_links(content):
            if not is_well_formed_target(link.target):
                found.append(errors.malformed_link(link.line_no, link.raw))
            elif link.is_image and not link.text.strip():
                found.append(errors.missing_alt_text(link.line_no, link.target.strip()))

    return found


def validate_file(doc: DocFile, config: DocsConfig) -> list[ValidationError]:
    try:
        md = read_markdown(doc.full_path)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Could not read %s: %s", doc.rel_path, e)
        found = [errors.junk_filename(doc.filename)] if config.is_junk(doc.filename) else []
        found.append(errors.unreadable(str(e)))
        return found
    return check_document(doc.filename, md.content, config)


def validate_tree(root: str | Path, config: DocsConfig) -> ValidationReport:
    files = find_markdown_files(root, config)
    logger.info("--- Validating %d markdown files under %s ---", len(files), root)

    report = ValidationReport(files_checked=len(files))
    for doc in files:
        found = validate_file(doc, config)
        if found:
            logger.info("%s: %d error(s)", doc.rel_path, len(found))
            report.results[doc.rel_path] = found

    if report.ok:
        logger.info("Validation successful - no errors in %d files.", report.files_checked)
    else:
        logger.info("Validation failed: %d errors in %d files.", report.total_errors, len(report.results))
    return report
