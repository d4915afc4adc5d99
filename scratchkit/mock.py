#
# Scratchkit Mock Call Tools
#

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
import os
from typing import Any, Iterable
from unittest import mock

# Local ----------------------------------------------------------------------------------------------------------------
from .tools import fmt_type, fmt_value


# Methods --------------------------------------------------------------------------------------------------------------

def normalize_calls(base_dir: str | os.PathLike[str], calls: mock.Mock | Iterable[Any]) -> list[str]:
    """
    Extract the file paths passed to a spy and return them relative to base_dir.

    The first positional argument of every call is taken as a path, made relative
    to base_dir and rewritten with forward slashes, so expected paths read the same
    on every platform. Order and duplicates are preserved: the result lines up
    one-to-one with the calls.

    Args:
        base_dir: Directory the paths are made relative to. Relative values are
            resolved against the current working directory.
        calls: A Mock or autospec function (its call_args_list is used), a sequence
            of mock.call objects, or a sequence of plain argument lists/tuples.

    Returns:
        list[str]: Normalized relative paths, one per call. Paths outside base_dir
            contain '..' segments; base_dir itself becomes '.'.

    Raises:
        ValueError: If a call has no positional arguments.
        TypeError: If a first argument is not path-like, or calls is not iterable.

    Examples:
        >>> spy = mock.Mock()
        >>> _ = spy("/work/a/b.txt")
        >>> _ = spy("/work/c.txt")
        >>> normalize_calls("/work", spy)
        ['a/b.txt', 'c.txt']

        >>> normalize_calls("/work/a", [("/work/c.txt",)])
        ['../c.txt']
    """
    # Mocks and autospec functions both record calls in call_args_list
    calls = getattr(calls, "call_args_list", calls)
    if not isinstance(calls, abc.Iterable) or isinstance(calls, (str, bytes)):
        raise TypeError(f"calls must be a Mock or an iterable of call arguments, but got {fmt_type(calls)}")

    result = []
    for index, call in enumerate(calls):
        file_path = _first_arg(call, index)
        relative_path = os.path.relpath(file_path, base_dir)
        result.append(relative_path.replace("\\", "/"))
    return result


# Private methods ------------------------------------------------------------------------------------------------------

def _first_arg(call: Any, index: int) -> str:
    if not isinstance(call, abc.Sequence) or isinstance(call, (str, bytes)):
        raise TypeError(f"call #{index} must be a mock.call or a sequence of arguments, but got {fmt_type(call)}")

    # mock.call objects are tuples too; .args strips the name and kwargs parts
    args = getattr(call, "args", call)

    if not args:
        raise ValueError(f"call #{index} has no positional arguments, expected a file path first: {fmt_value(call)}")

    try:
        path = os.fspath(args[0])
    except TypeError:
        raise TypeError(f"first argument of call #{index} must be path-like, but got {fmt_value(args[0])}") from None

    if isinstance(path, bytes):
        path = os.fsdecode(path)
    return path
