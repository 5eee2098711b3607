from pathlib import Path

import pytest

from soundbank.errors import PathEscapeError
from soundbank.utils.validation import join_within_root


@pytest.mark.parametrize("rel_path", ["", "."])
def test_empty_and_dot_name_the_root(tmp_path: Path, rel_path: str) -> None:
    joined = join_within_root(tmp_path, rel_path)
    assert joined.resolve() == tmp_path.resolve()


def test_nested_path_is_joined(tmp_path: Path) -> None:
    assert join_within_root(tmp_path, "models/sms/a.json") == tmp_path / "models" / "sms" / "a.json"


@pytest.mark.parametrize("rel_path", ["..", "../x", "a/b/../../../x"])
def test_parent_escapes_are_rejected(tmp_path: Path, rel_path: str) -> None:
    with pytest.raises(PathEscapeError):
        join_within_root(tmp_path / "root", rel_path)


def test_absolute_paths_are_rejected(tmp_path: Path) -> None:
    with pytest.raises(PathEscapeError):
        join_within_root(tmp_path / "root", str(tmp_path / "root" / "inside.txt"))


def test_sibling_with_shared_prefix_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(PathEscapeError):
        join_within_root(tmp_path / "bank", "../bank-other/x.txt")


def test_escape_error_is_a_value_error(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        join_within_root(tmp_path, "../x")
