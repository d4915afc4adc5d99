#
# Scratchkit Scratch Directory
#

# Standard library -----------------------------------------------------------------------------------------------------
import os
import tempfile
import warnings
from pathlib import Path, PurePath

# Local ----------------------------------------------------------------------------------------------------------------
from .os import clean_dir, make_dirs, remove_tree
from .tools import fmt_type, fmt_value, get_caller_file

DEFAULT_NAMESPACE = "scratchkit"

_PACKAGE_DIR = Path(__file__).resolve().parent


# Classes --------------------------------------------------------------------------------------------------------------

class ScratchDir:
    """
    Temporary working directory owned by a single test module.

    The directory lives at ``<temp root>/<namespace>/<owner>-dir`` where the temp root is
    the symlink-free system temp directory and ``owner`` is the path of the owning module
    relative to the current working directory. Every test module therefore gets its own
    directory, while repeated use from one module lands in the same place. The directory
    is created on construction.

    Args:
        owner: Path of the owning module. If None, the source file of the code that
            instantiates ScratchDir is used.
        namespace: Directory segment grouping all scratch directories under the temp root.
        temp_root: Base directory to use instead of the system temp directory.

    Raises:
        TypeError: If namespace is not a non-empty string, or owner is not a path.
        ValueError: If owner resolves to the working directory itself.
        OSError: If the directory cannot be created.

    Examples:
        >>> scratch = ScratchDir()           # inside tests/test_loader.py
        >>> scratch.path
        PosixPath('/tmp/scratchkit/tests/test_loader.py-dir')
        >>> scratch.create_file("conf/app.json", '{"debug": true}')
        >>> scratch.clean()
        [PosixPath('/tmp/scratchkit/tests/test_loader.py-dir/conf'), ...]

        Also usable as a context manager which deletes the directory on exit:

        >>> with ScratchDir(owner="adhoc") as scratch:
        ...     scratch.create_dir("a/b")
    """

    def __init__(self,
                 owner: str | os.PathLike[str] | None = None, *,
                 namespace: str = DEFAULT_NAMESPACE,
                 temp_root: str | os.PathLike[str] | None = None):
        if not isinstance(namespace, str) or not namespace:
            raise TypeError(f"namespace must be a non-empty string, but got {fmt_value(namespace)}")

        # Real path matters on macOS where /var/folders is a symlink: code that chdir()s
        # into the scratch directory reports the resolved path back.
        base = os.path.realpath(tempfile.gettempdir() if temp_root is None else temp_root)

        if owner is None:
            owner = get_caller_file(1, skip=[_PACKAGE_DIR])
        elif not isinstance(owner, (str, os.PathLike)):
            raise TypeError(f"owner must be a path, but got {fmt_type(owner)}")

        self._namespace = namespace
        self._owner = _owner_id(owner)
        self._path = Path(base, namespace, self._owner.parent, f"{self._owner.name}-dir")

        make_dirs(self._path)

    def __enter__(self) -> "ScratchDir":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.delete_temp_dir()

    def __fspath__(self) -> str:
        return str(self._path)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self._path)!r})"

    def __truediv__(self, relative: str | os.PathLike[str]) -> Path:
        return self.absolute_path(relative)

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def owner(self) -> Path:
        """Owning module path relative to the working directory at construction time."""
        return self._owner

    @property
    def path(self) -> Path:
        """Absolute, symlink-free root of this scratch directory."""
        return self._path

    def absolute_path(self, relative: str | os.PathLike[str]) -> Path:
        """
        Return the absolute path of relative inside the scratch directory.

        Joins rather than replaces: an absolute ``relative`` is re-rooted under the
        scratch directory. Dot segments are collapsed lexically; ``..`` segments are
        not confined and may point outside the scratch directory.
        """
        rel = PurePath(relative)
        parts = rel.parts[1:] if rel.anchor else rel.parts
        return Path(os.path.normpath(os.path.join(self._path, *parts)))

    def create_dir(self, relative: str | os.PathLike[str]) -> None:
        """Create a directory, and any missing parents, inside the scratch directory."""
        make_dirs(self.absolute_path(relative))

    def create_file(self, relative: str | os.PathLike[str], contents: str, *, encoding: str = "utf-8") -> None:
        """
        Write contents plus a single trailing newline to a file, creating parent directories.

        Existing files are overwritten. The newline is written as-is on every platform.
        The write is not atomic.
        """
        file_path = self.absolute_path(relative)
        make_dirs(file_path.parent)
        file_path.write_text(f"{contents}\n", encoding=encoding, newline="")

    def clean(self) -> list[Path]:
        """
        Remove everything inside the scratch directory, dotfiles included, keeping the directory.

        Returns:
            list[Path]: Every removed file and directory, parents before children.
                Empty if there was nothing to remove.
        """
        return clean_dir(self._path, missing_ok=True)

    def delete_temp_dir(self) -> list[Path]:
        """
        Remove the scratch directory itself.

        The instance must not be used for further file operations afterward.

        Returns:
            list[Path]: ``[path]`` if the directory existed, ``[]`` otherwise.
        """
        return remove_tree(self._path)


# Private methods ------------------------------------------------------------------------------------------------------

def _owner_id(owner: str | os.PathLike[str]) -> Path:
    """Express an owning module path relative to the current working directory."""
    owner_str = os.fspath(owner)
    if isinstance(owner_str, bytes):
        owner_str = os.fsdecode(owner_str)

    # <stdin>, <string>, <ipython-input-...>
    if owner_str.startswith("<") and owner_str.endswith(">"):
        relative = Path(owner_str[1:-1])
        if not relative.name:
            raise ValueError(f"owner must name a module, but got {fmt_value(owner_str)}")
        return relative

    cwd = os.path.realpath(os.getcwd())
    owner_abs = os.path.realpath(os.path.join(cwd, owner_str))

    try:
        relative = Path(owner_abs).relative_to(cwd)
    except ValueError:
        relative = Path(*Path(owner_abs).parts[1:])
        warnings.warn(
            f"owner {fmt_value(owner_abs)} is outside the working directory {fmt_value(cwd)}, "
            f"using {fmt_value(str(relative))} as its scratch key",
            UserWarning,
            stacklevel=3
        )

    # The working directory itself (or a filesystem root) gives no name to key on
    if not relative.name:
        raise ValueError(f"owner must name a module below the working directory, but got {fmt_value(owner_str)}")
    return relative
