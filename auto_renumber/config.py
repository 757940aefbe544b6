"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
import tomllib

from .constants import DEFAULT_INDENT_SIZE, DEFAULT_MAX_FILE_SIZE, MAX_INDENT_SIZE, MIN_INDENT_SIZE
from .strategy import NumberingStrategy

TOOL_NAME = "auto-renumber"


@dataclass
class RenumberConfig:
    """Settings that drive live renumbering and checklist sorting.

    Attributes:
        live_update: Master switch for reacting to edits.
        numbering_strategy: How a list that continues no sibling starts.
            Accepts a `NumberingStrategy` or its spelling (``"dynamic"``,
            ``"start-from-one"``) until normalized.
        sort_checkboxes_bottom: Cluster completed items at the bottom of
            their scope (top when False).
        live_checkbox_update: Reorder checkboxes when one is toggled.
        live_numbering_update: Renumber lists when they are edited.
        indent_size: Editor indent width (2-8). Only a formatting hint; the
            engine compares raw leading whitespace.
        smart_paste: Renumber the lists touched by a paste or drop.
        checkbox_scope_checkboxes_only: Whether a non-checkbox line at the
            same indentation ends a checkbox scope.
        max_file_size: Largest file in bytes the CLI will process.

    Examples:
        RenumberConfig(numbering_strategy="start-from-one", sort_checkboxes_bottom=False)
    """

    # Live behavior
    live_update: bool = True
    live_numbering_update: bool = True
    live_checkbox_update: bool = True
    smart_paste: bool = True

    # Policies
    numbering_strategy: NumberingStrategy | str = NumberingStrategy.DYNAMIC
    sort_checkboxes_bottom: bool = True
    checkbox_scope_checkboxes_only: bool = True

    # Formatting
    indent_size: int = DEFAULT_INDENT_SIZE

    # Limits
    max_file_size: int = DEFAULT_MAX_FILE_SIZE


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`indent_size` must be between 2 and 8")
    """


_BOOLEAN_FIELDS = (
    "live_update",
    "live_numbering_update",
    "live_checkbox_update",
    "smart_paste",
    "sort_checkboxes_bottom",
    "checkbox_scope_checkboxes_only",
)


def load_config(search_path: Path) -> RenumberConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root,
    reading the ``[tool.auto-renumber]`` table from `pyproject.toml` and the
    ``[auto-renumber]`` or ``[tool.auto-renumber]`` table from
    `.auto-renumber.toml`. Files that cannot be read or decoded are skipped.
    Returns defaults when nothing is found.

    Args:
        search_path: Directory where the lookup starts.

    Returns:
        RenumberConfig: Loaded configuration, normalized.

    Raises:
        ConfigError: If a table is present but is not a mapping, contains
            unsupported keys, or names an unknown strategy.

    Examples:
        load_config(Path("notes"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", TOOL_NAME)]
        )
        if pyproject_config is not None:
            return normalize_config(pyproject_config)

        dotfile_config = _load_from_file(
            current / f".{TOOL_NAME}.toml",
            table_paths=[(TOOL_NAME,), ("tool", TOOL_NAME)],
        )
        if dotfile_config is not None:
            return normalize_config(dotfile_config)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return RenumberConfig()


_MISSING = object()


def _load_from_file(
    config_file: Path, table_paths: list[tuple[str, ...]]
) -> RenumberConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> RenumberConfig:
    table_display = ".".join(table_path)

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    # TOML keys may use dashes, as in `sort-checkboxes-bottom`
    raw_config = {key.replace("-", "_"): value for key, value in raw_config.items()}
    known = {field.name for field in fields(RenumberConfig)}
    unknown = sorted(set(raw_config) - known)
    if unknown:
        raise ConfigError(
            f"Unsupported `[{table_display}]` settings in {config_file}: {', '.join(unknown)}"
        )

    return RenumberConfig(**raw_config)


def normalize_config(config: RenumberConfig) -> RenumberConfig:
    """Resolve the strategy spelling into a `NumberingStrategy`.

    Raises:
        ConfigError: If the strategy is not recognized.
    """
    try:
        strategy = NumberingStrategy.parse(config.numbering_strategy)
    except ValueError as error:
        raise ConfigError(f"`numbering_strategy`: {error}") from error
    return replace(config, numbering_strategy=strategy)


def validate_config(config: RenumberConfig) -> None:
    """Validate a `RenumberConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If a switch is not a boolean, the strategy is unknown,
            `indent_size` is outside 2-8, or `max_file_size` is not a positive
            integer.

    Examples:
        validate_config(RenumberConfig(indent_size=2))
    """
    config = normalize_config(config)

    for name in _BOOLEAN_FIELDS:
        if not isinstance(getattr(config, name), bool):
            raise ConfigError(f"`{name}` must be a boolean")

    _ensure_integers({"indent_size": config.indent_size, "max_file_size": config.max_file_size})

    if not MIN_INDENT_SIZE <= config.indent_size <= MAX_INDENT_SIZE:
        raise ConfigError(
            f"`indent_size` must be between {MIN_INDENT_SIZE} and {MAX_INDENT_SIZE}"
        )
    if config.max_file_size <= 0:
        raise ConfigError("`max_file_size` must be a positive integer")


def apply_overrides(config: RenumberConfig, **overrides: object) -> RenumberConfig:
    """Apply override values to a `RenumberConfig`.

    Args:
        config: Base configuration to update.
        overrides: Values keyed by field name; None values are ignored.

    Returns:
        RenumberConfig: Updated copy, or `config` itself when nothing changes.

    Raises:
        TypeError: If an override name is not a `RenumberConfig` field.

    Examples:
        updated = apply_overrides(config, numbering_strategy="dynamic")
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> RenumberConfig:
    """Load, override, normalize and validate configuration.

    Raises:
        ConfigError: If loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), numbering_strategy="start-from-one")
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    config = normalize_config(config)
    validate_config(config)
    return config


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
