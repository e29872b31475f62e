from pathlib import Path

import wayfarer.data
from wayfarer.data import paths


def test_get_chapters_path_base_path(tmp_path: Path) -> None:
    assert paths.get_chapters_path(tmp_path) == tmp_path


def test_get_chapters_path_ships_inside_package() -> None:
    chapters_path = paths.get_chapters_path()
    assert chapters_path.name == "chapters"
    assert chapters_path.parent == Path(wayfarer.data.__file__).resolve().parent
    assert (chapters_path / "c1.json").exists()
