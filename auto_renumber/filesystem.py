"""Filesystem helpers for the auto-renumber command line."""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path

from .constants import DEFAULT_MAX_FILE_SIZE, MARKDOWN_EXTENSIONS

MAX_FILE_SIZE_ENV_VAR = "AUTO_RENUMBER_MAX_FILE_SIZE"


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Resolve the maximum file size, honoring ``AUTO_RENUMBER_MAX_FILE_SIZE``.

    Args:
        default: Size in bytes used when the environment variable is unset.

    Returns:
        int: Maximum allowed file size in bytes.

    Raises:
        ValueError: If the environment value is not a positive integer.
    """
    env_value = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if env_value is None:
        return default

    try:
        max_size = int(env_value)
    except ValueError as error:
        raise ValueError(
            f"Invalid value for {MAX_FILE_SIZE_ENV_VAR}: {env_value} (expected positive integer)"
        ) from error

    if max_size <= 0:
        raise ValueError(f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {max_size}.")
    return max_size


def normalize_filepath(raw_path: str, base_dir: Path) -> Path:
    """Resolve a Markdown path and check it is safe to rewrite.

    Args:
        raw_path: Path given on the command line.
        base_dir: Working directory the file must live under.

    Returns:
        Path: Absolute path to the file.

    Raises:
        ValueError: If the path is missing, a symlink, not a regular file,
            outside `base_dir`, or not a Markdown file.

    Examples:
        normalize_filepath("notes/todo.md", Path.cwd())
    """
    path = Path(raw_path).expanduser()

    if any(candidate.is_symlink() for candidate in (path, *path.parents)):
        raise ValueError(f"Symlinks are not supported: {path}")

    try:
        resolved = path.resolve(strict=True)
    except OSError as error:
        raise ValueError(f"{path} does not exist or cannot be resolved: {error}") from error

    if not resolved.is_file():
        raise ValueError(f"{resolved} is not a regular file.")

    try:
        resolved.relative_to(base_dir)
    except ValueError as error:
        raise ValueError(f"{resolved} is outside of the working directory {base_dir}.") from error

    if resolved.suffix.lower() not in MARKDOWN_EXTENSIONS:
        raise ValueError(
            f"{resolved} is not a Markdown file. "
            f"Supported extensions are: {', '.join(MARKDOWN_EXTENSIONS)}"
        )

    return resolved


def collect_file_stat(filepath: Path) -> os.stat_result:
    """Stat a regular file without following symlinks.

    Raises:
        IOError: If the path cannot be accessed or is not a regular file.
    """
    try:
        stat_result = os.stat(filepath, follow_symlinks=False)
    except OSError as error:
        raise IOError(f"Error accessing {filepath}: {error}") from error

    if not stat.S_ISREG(stat_result.st_mode):
        raise IOError(f"{filepath} is not a regular file.")
    return stat_result


def enforce_file_size(stat_result: os.stat_result, max_size: int, filepath: Path) -> None:
    if stat_result.st_size > max_size:
        raise IOError(f"{filepath} exceeds the maximum allowed size of {max_size} bytes.")


def ensure_file_unchanged(
    expected_stat: os.stat_result, current_stat: os.stat_result, filepath: Path
) -> None:
    """Refuse to continue when the file changed since `expected_stat` was taken.

    Raises:
        IOError: If inode, device, size or modification time differ.
    """
    fingerprint_before = (
        expected_stat.st_ino,
        expected_stat.st_dev,
        expected_stat.st_size,
        expected_stat.st_mtime_ns,
    )
    fingerprint_after = (
        current_stat.st_ino,
        current_stat.st_dev,
        current_stat.st_size,
        current_stat.st_mtime_ns,
    )
    if fingerprint_before != fingerprint_after:
        raise IOError(f"{filepath} changed during processing; refusing to overwrite.")


def read_document(filepath: Path) -> str:
    """Read a UTF-8 file, keeping its line endings untouched.

    Raises:
        IOError: If the file cannot be read.
    """
    try:
        with open(filepath, "r", encoding="UTF-8", newline="") as handle:
            return handle.read()
    except (OSError, UnicodeDecodeError) as error:
        raise IOError(f"Error reading {filepath}: {error}") from error


def write_document(filepath: Path, text: str, expected_stat: os.stat_result) -> None:
    """Atomically replace a file's content, keeping its permissions.

    Writes to a temporary file in the same directory and renames it over
    `filepath` after checking the original was not modified meanwhile.

    Args:
        filepath: File to replace.
        text: New content.
        expected_stat: Stat taken when the file was read.

    Raises:
        IOError: If the file changed since it was read or cannot be replaced.
    """
    ensure_file_unchanged(expected_stat, collect_file_stat(filepath), filepath)

    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", encoding="UTF-8", newline="", delete=False, dir=filepath.parent
        ) as tmp_file:
            temp_path = Path(tmp_file.name)
            tmp_file.write(text)
            tmp_file.flush()
            os.fsync(tmp_file.fileno())
        os.chmod(temp_path, stat.S_IMODE(expected_stat.st_mode))
        os.replace(temp_path, filepath)
    except OSError as error:
        raise IOError(f"Could not update {filepath}: {error}") from error
    finally:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)
