from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DocsError(Exception):
    """Base class for errors raised by argus_docs."""


class ConfigError(DocsError):
    """The static tables could not be loaded."""


class ErrorKind(str, Enum):
    JUNK_FILENAME = "junk_filename"
    MISSING_FRONTMATTER = "missing_frontmatter"
    MISSING_FIELD = "missing_field"
    MALFORMED_LINK = "malformed_link"
    MISSING_ALT_TEXT = "missing_alt_text"
    UNREADABLE = "unreadable"


@dataclass(frozen=True)
class ValidationError:
    """One problem found in one file during one run. Never persisted."""

    kind: ErrorKind
    message: str

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind.value, "message": self.message}


def junk_filename(filename: str) -> ValidationError:
    return ValidationError(ErrorKind.JUNK_FILENAME, f"Junk doc detected: {filename}")


def missing_frontmatter() -> ValidationError:
    return ValidationError(ErrorKind.MISSING_FRONTMATTER, "Missing frontmatter block")


def missing_field(field: str) -> ValidationError:
    return ValidationError(ErrorKind.MISSING_FIELD, f"Missing frontmatter: {field}")


def malformed_link(line_no: int, raw: str) -> ValidationError:
    return ValidationError(ErrorKind.MALFORMED_LINK, f"Malformed link on line {line_no}: {raw}")


def missing_alt_text(line_no: int, target: str) -> ValidationError:
    return ValidationError(
        ErrorKind.MISSING_ALT_TEXT, f"Image missing alt text on line {line_no}: {target}"
    )


def unreadable(reason: str) -> ValidationError:
    return ValidationError(ErrorKind.UNREADABLE, f"Could not read file: {reason}")
