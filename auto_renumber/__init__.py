"""
auto-renumber: keep numbered lists and checklists in order while editing.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    auto-renumber notes.md

Library Usage:
    from auto_renumber import LineDocument, RenumberConfig, RenumberSession

    document = LineDocument.from_text("1. a\\n1. b\\n")
    session = RenumberSession(RenumberConfig(numbering_strategy="start-from-one"))
    session.renumber_document(document)
    document.to_text()  # "1. a\\n2. b\\n"
"""

from .changes import ChangeAccumulator, LineOverlay
from .checkbox import CheckboxReorderer, find_checkbox_boundary
from .classifier import match_checkbox, match_numbered
from .config import ConfigError, RenumberConfig, build_config, load_config
from .editor import Editor, LineDocument
from .exceptions import EditRejectedError, RenumberError
from .locator import find_block_start, find_scope_bounds
from .models import Change, CheckboxMatch, ListItemMatch, PendingChanges, ScopeBounds
from .renumberer import Renumberer
from .session import RenumberSession
from .strategy import NumberingStrategy

__version__ = "0.1.0"

__all__ = [
    # Engine
    "Renumberer",
    "CheckboxReorderer",
    "NumberingStrategy",
    "RenumberSession",
    "ChangeAccumulator",
    "LineOverlay",
    # Classification and lookup
    "match_numbered",
    "match_checkbox",
    "find_block_start",
    "find_scope_bounds",
    "find_checkbox_boundary",
    # Data models
    "Change",
    "CheckboxMatch",
    "ListItemMatch",
    "PendingChanges",
    "ScopeBounds",
    # Host
    "Editor",
    "LineDocument",
    # Configuration
    "RenumberConfig",
    "build_config",
    "load_config",
    # Exceptions
    "ConfigError",
    "EditRejectedError",
    "RenumberError",
    # Version
    "__version__",
]
