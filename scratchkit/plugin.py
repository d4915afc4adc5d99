"""
pytest plugin providing per-module scratch directories.

Registered through the ``pytest11`` entry point, so the fixtures are available
as soon as scratchkit is installed:

    def test_reads_config(clean_scratch_dir):
        clean_scratch_dir.create_file("app.json", "{}")
        ...
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Iterator

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from .scratch import DEFAULT_NAMESPACE, ScratchDir


# Hooks ----------------------------------------------------------------------------------------------------------------

def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("scratchkit", "per-module scratch directories")
    group.addoption(
        "--scratch-namespace",
        action="store",
        dest="scratch_namespace",
        default=None,
        help=f"directory under the system temp dir holding scratch directories (default: {DEFAULT_NAMESPACE})",
    )
    group.addoption(
        "--scratch-keep",
        action="store_true",
        dest="scratch_keep",
        default=False,
        help="keep scratch directories after their module finishes",
    )
    parser.addini(
        "scratch_namespace",
        help="directory under the system temp dir holding scratch directories",
        default=DEFAULT_NAMESPACE,
    )


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture(scope="module")
def scratch_dir(request: pytest.FixtureRequest) -> Iterator[ScratchDir]:
    """Scratch directory shared by all tests of a module, deleted after the module."""
    config = request.config
    namespace = config.getoption("scratch_namespace") or config.getini("scratch_namespace")

    scratch = ScratchDir(owner=request.path, namespace=namespace)
    yield scratch

    if not config.getoption("scratch_keep"):
        scratch.delete_temp_dir()


@pytest.fixture
def clean_scratch_dir(scratch_dir: ScratchDir) -> Iterator[ScratchDir]:
    """The module scratch directory, emptied after each test."""
    yield scratch_dir
    scratch_dir.clean()
