#
# Pytest Fixtures
#

# Standard library -----------------------------------------------------------------------------------------------------
import pathlib

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

pytest_plugins = ["pytester", "scratchkit.plugin"]


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture()
def populated_dir(tmp_path: pathlib.Path) -> pathlib.Path:
    """Create a directory with mixed contents (files, dotfiles and nested subdirectories)."""
    root = tmp_path / "root"
    root.mkdir()
    # Top-level files
    (root / "a.txt").write_text("A")
    (root / ".hidden").write_text("H")
    # Nested directory with files
    sub = root / "sub"
    sub.mkdir()
    (sub / "c.dat").write_text("C")
    # Deeper nesting
    deep = sub / "deep"
    deep.mkdir()
    (deep / "e.txt").write_text("E")
    return root


@pytest.fixture()
def in_tmp_cwd(tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch) -> pathlib.Path:
    """Run the test with tmp_path as the working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
