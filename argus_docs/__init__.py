"""argus_docs: sync and validation tooling for the Argus documentation site.

Public API is re-exported from the submodules.
"""

from .config import DocsConfig, load_docs_config
from .errors import ConfigError, DocsError, ErrorKind, ValidationError
from .sync import SyncEngine, SyncReport
from .validator import ValidationReport, check_document, validate_tree

__all__ = [
    "ConfigError",
    "DocsConfig",
    "DocsError",
    "ErrorKind",
    "SyncEngine",
    "SyncReport",
    "ValidationError",
    "ValidationReport",
    "check_document",
    "load_docs_config",
    "validate_tree",
]
