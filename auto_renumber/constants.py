"""Constants used across the auto-renumber package."""

from __future__ import annotations

import re

# Ordered list markers carry at most 9 digits (CommonMark)
MAX_ORDINAL_DIGITS = 9

# Line patterns
NUMBERED_PATTERN = re.compile(rf"^(?P<indent>\s*)(?P<ordinal>\d{{1,{MAX_ORDINAL_DIGITS}}})\.\s")
CHECKBOX_PATTERN = re.compile(
    rf"^(?P<indent>\s*)(?P<marker>\d{{1,{MAX_ORDINAL_DIGITS}}}\.\s|-\s)\[(?P<state>[ x])\]\s"
)
LEADING_WHITESPACE_PATTERN = re.compile(r"^\s*")

# Sentinel returned by locators when no line qualifies
NOT_FOUND = -1

# Configuration defaults and limits
MIN_INDENT_SIZE = 2
MAX_INDENT_SIZE = 8
DEFAULT_INDENT_SIZE = 4
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024

MARKDOWN_EXTENSIONS = (".md", ".markdown")
