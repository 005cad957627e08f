"""Pytest fixtures for filetagger tests."""

import io
import tempfile
from pathlib import Path
from typing import Dict, Generator

import pytest
from rich.console import Console

from filetagger.catalog import Catalog
from filetagger.config import KeyMap
from filetagger.ui import TaggerTUI


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for isolated test environments.

    Yields:
        Path to the temporary directory.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def input_dir(temp_dir: Path) -> Path:
    """Empty input directory."""
    path = temp_dir / "input"
    path.mkdir()
    return path


@pytest.fixture
def output_dir(temp_dir: Path) -> Path:
    """Empty output directory."""
    path = temp_dir / "output"
    path.mkdir()
    return path


@pytest.fixture
def media_tree(input_dir: Path) -> Dict[str, Path]:
    """Create a nested input tree with mixed extensions.

    Creates:
        input/
        ├── a.jpg
        ├── b.png
        ├── notes.txt
        ├── README
        └── trip/
            ├── beach.JPG
            ├── log.txt
            └── day2/
                └── sunset.png

    Returns:
        Dictionary mapping short names to file paths.
    """
    files = {
        "a": input_dir / "a.jpg",
        "b": input_dir / "b.png",
        "notes": input_dir / "notes.txt",
        "readme": input_dir / "README",
        "beach": input_dir / "trip" / "beach.JPG",
        "log": input_dir / "trip" / "log.txt",
        "sunset": input_dir / "trip" / "day2" / "sunset.png",
    }
    for name, path in files.items():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(f"content of {name}".encode())
    return files


@pytest.fixture
def scenario_dirs(input_dir: Path, output_dir: Path) -> Dict[str, Path]:
    """Input with a.jpg, b.png and c.gif and an empty output directory."""
    (input_dir / "a.jpg").write_bytes(b"jpeg bytes")
    (input_dir / "b.png").write_bytes(b"png bytes")
    (input_dir / "c.gif").write_bytes(b"gif bytes")
    return {"input": input_dir, "output": output_dir}


@pytest.fixture
def ready_catalog(scenario_dirs: Dict[str, Path]) -> Catalog:
    """Catalog over the scenario directories, scanned and materialized."""
    catalog = Catalog(scenario_dirs["input"], scenario_dirs["output"])
    catalog.populate(["jpg", "png"])
    catalog.reconcile_with_existing_output()
    catalog.materialize_pending()
    return catalog


@pytest.fixture
def key_map() -> KeyMap:
    """The default three-key mapping."""
    return KeyMap({"Q": "nature", "W": "architecture", "E": "painting"})


@pytest.fixture
def tui_with_captured_output() -> TaggerTUI:
    """Create a TaggerTUI instance with Console output captured to StringIO.

    Access captured output via: tui.console.file.getvalue()
    """
    output = io.StringIO()
    console = Console(file=output, force_terminal=False, width=120)
    return TaggerTUI(console=console)
