"""
Small filesystem primitives for creating and tearing down scratch trees.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import os
import shutil
from pathlib import Path

# Local ----------------------------------------------------------------------------------------------------------------
from .tools import fmt_value


# Methods --------------------------------------------------------------------------------------------------------------

def make_dirs(path: str | os.PathLike[str]) -> Path:
    """
    Create a directory and any missing ancestors, succeeding if it already exists.

    Args:
        path: Directory to create.

    Returns:
        Path: The directory path.

    Raises:
        FileExistsError: If a non-directory already exists at path.
        PermissionError: If lacking permission to create the directory.
        OSError: If creation fails for other reasons.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def clean_dir(
        path: str | os.PathLike[str], *,
        missing_ok: bool = False,
        ignore_errors: bool = False,
) -> list[Path]:
    """
    Removes all contents from a directory, leaving the directory empty.

    Recursively deletes all files, subdirectories, dotfiles and symlinks within
    the directory, but preserves the directory itself (including its
    permissions and metadata). Symlinks to directories are unlinked, never followed.

    Args:
        path: Directory to empty.
        missing_ok: If False, raises FileNotFoundError if directory doesn't exist.
            If True, silently succeeds if directory is missing.
        ignore_errors: If False, raises exceptions on deletion failures.
            If True, silently continues when individual items can't be deleted.

    Returns:
        list[Path]: Every removed entry, nested ones included, parents before children.
            Entries under a top-level item that failed to delete are not reported.

    Raises:
        FileNotFoundError: If path doesn't exist (when missing_ok=False).
        NotADirectoryError: If path exists but is not a directory.
        PermissionError: If lacking permission to delete contents (when ignore_errors=False).
        OSError: If deletion fails for other reasons (when ignore_errors=False).

    Examples:
        >>> clean_dir("/tmp/cache")
        [PosixPath('/tmp/cache/a.txt'), PosixPath('/tmp/cache/sub'), PosixPath('/tmp/cache/sub/b.txt')]
        >>> clean_dir("/tmp/missing", missing_ok=True)
        []
    """
    dir_path = Path(path)

    if not dir_path.exists():
        if missing_ok:
            return []
        raise FileNotFoundError(f"Directory not found: {fmt_value(str(dir_path))}")

    if not dir_path.is_dir():
        raise NotADirectoryError(f"Path is not a directory: {fmt_value(str(dir_path))}")

    removed: list[Path] = []
    for item in sorted(dir_path.iterdir()):
        entries = _list_tree(item)
        try:
            if item.is_dir() and not item.is_symlink():
                shutil.rmtree(item)
            else:
                item.unlink()
        except Exception:
            if not ignore_errors:
                raise
            continue
        removed.extend(entries)

    return removed


def remove_tree(path: str | os.PathLike[str]) -> list[Path]:
    """
    Remove a file, symlink or whole directory tree.

    A missing target is not an error.

    Returns:
        list[Path]: ``[path]`` if something was removed, ``[]`` otherwise.

    Raises:
        PermissionError: If lacking permission to delete.
        OSError: If deletion fails for other reasons.
    """
    target = Path(path)

    try:
        if target.is_dir() and not target.is_symlink():
            shutil.rmtree(target)
        else:
            target.unlink()
    except FileNotFoundError:
        return []

    return [target]


# Private methods ------------------------------------------------------------------------------------------------------

def _list_tree(item: Path) -> list[Path]:
    """List item and, for a real directory, everything below it, top-down."""
    entries = [item]
    if not item.is_dir() or item.is_symlink():
        return entries

    for root, dirs, files in os.walk(item, followlinks=False):
        dirs.sort()
        root_path = Path(root)
        for name in sorted(dirs + files):
            entries.append(root_path / name)
    return entries
