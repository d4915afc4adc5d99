#
# Scratchkit Tools & Utilities
#

# Standard library -----------------------------------------------------------------------------------------------------
import os
from inspect import stack
from pathlib import Path
from typing import Any, Iterable


# Methods --------------------------------------------------------------------------------------------------------------

def fmt_type(obj: Any, *, max_repr: int = 120) -> str:
    """Format type information for exception messages.

    Args:
        obj: Any Python object or type to extract type information from.
        max_repr: Maximum length before truncation.

    Returns:
        Formatted type string like "<type: int>".

    Examples:
        >>> fmt_type(42)
        '<type: int>'
        >>> fmt_type(int)
        '<type: int>'
        >>> fmt_type(ValueError("test"))
        '<type: ValueError>'
    """
    target_type = obj if isinstance(obj, type) else type(obj)

    try:
        type_name = target_type.__name__
    except AttributeError:
        type_name = str(target_type)

    return f"<type: {_fmt_truncate(type_name, max_repr)}>"


def fmt_value(x: Any, *, max_repr: int = 120) -> str:
    """
    Format a single value as a type–value pair for exception messages.

    Handles broken __repr__ and extremely long representations gracefully. Inner ">" is escaped
    to avoid conflicts with the wrapper brackets.

    Examples:
        >>> fmt_value(42)
        '<int: 42>'
        >>> fmt_value("hello world", max_repr=8)
        "<str: 'hello'...>"
    """
    t = type(x).__name__

    try:
        base_repr = repr(x)
    except Exception as e:
        base_repr = f"<{t} object (repr failed: {type(e).__name__})>"

    base_repr = base_repr.replace(">", "\\>")
    return f"<{t}: {_fmt_truncate(base_repr, max_repr)}>"


def get_caller_file(depth: int = 1, *, skip: Iterable[str | os.PathLike[str]] = ()) -> Path:
    """Gets the source file of a function from the call stack.

    Walks the call stack to find the file that holds the code at the specified
    depth. Frames whose file lives inside one of the ``skip`` directories are
    passed over, so a library can ask "which file outside of me called in?"
    regardless of how many of its own frames sit in between.

    Args:
        depth (int): The desired depth in the call stack. `1` refers to the
            function that called get_caller_file, `2` to its caller, and so on.
            Defaults to 1.
        skip: Directories whose frames are ignored when searching outward.

    Returns:
        Path: The absolute filename of the frame found. Pseudo filenames such
            as ``<stdin>`` or ``<string>`` are returned as-is.

    Raises:
        IndexError: If the call stack is not deep enough for the given depth.
        TypeError: If `depth` is not an integer.
        ValueError: If `depth` is less than 1.

    Warning:
        This function depends on `inspect.stack()`, which can be
        computationally expensive. Call it once per object, not in loops.

    Examples:
        # tests/test_something.py
        def helper():
            return get_caller_file(2)

        helper()  # -> Path('/abs/path/tests/test_something.py')
    """
    if not isinstance(depth, int) or isinstance(depth, bool):
        raise TypeError(f"stack depth must be an integer, but got {fmt_type(depth)}")
    if depth < 1:
        raise ValueError(f"stack depth must be 1 or greater, but got {fmt_value(depth)}")

    skip_dirs = [os.path.realpath(d) for d in skip]
    frames = stack(context=0)

    # frames[0] is get_caller_file itself
    if depth >= len(frames):
        raise IndexError(f"call stack is not deep enough to access frame at depth {fmt_value(depth)}.")

    for frame_info in frames[depth:]:
        filename = frame_info.filename
        if _is_pseudo_filename(filename):
            return Path(filename)
        filename = os.path.realpath(filename)
        if not any(_is_within(filename, d) for d in skip_dirs):
            return Path(filename)

    raise IndexError(f"no frame outside of skipped directories at depth {fmt_value(depth)} or above.")


# Private methods ------------------------------------------------------------------------------------------------------

def _fmt_truncate(s: str, max_len: int, ellipsis: str = "...") -> str:
    if max_len <= 0 or len(s) <= max_len:
        return s

    # Keep quotes of string reprs outside the ellipsis
    if len(s) >= 2 and s[0] == s[-1] and s[0] in "'\"":
        keep = max(max_len - 2, 1)
        return s[:keep] + s[-1] + ellipsis
    return s[:max_len] + ellipsis


def _is_pseudo_filename(filename: str) -> bool:
    return filename.startswith("<") and filename.endswith(">")


def _is_within(path: str, directory: str) -> bool:
    try:
        return os.path.commonpath([path, directory]) == directory
    except ValueError:
        # Different drives on Windows
        return False
