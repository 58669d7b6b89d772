from pathlib import Path

import pytest

tomllib = pytest.importorskip("tomllib")

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# top-level names other distributions commonly install
GENERIC_NAMES = {"main", "settings", "config", "geometry", "pipeline", "overlay", "landmarks", "utils", "app"}


@pytest.fixture(scope="module")
def pyproject():
    with open(ROOT / "pyproject.toml", "rb") as f:
        return tomllib.load(f)


def test_installed_modules_exist_and_are_not_generic(pyproject):
    modules = pyproject["tool"]["setuptools"]["py-modules"]
    for name in modules:
        assert (SRC / f"{name}.py").is_file(), name
    assert not GENERIC_NAMES & set(modules)


def test_every_importable_module_is_installed(pyproject):
    modules = set(pyproject["tool"]["setuptools"]["py-modules"])
    # the Streamlit page is run by path, never imported
    on_disk = {p.stem for p in SRC.glob("*.py")} - {"streamlit_app"}
    assert on_disk == modules


def test_console_script_target(pyproject):
    target = pyproject["project"]["scripts"]["pullup-counter"]
    module, func = target.split(":")
    assert module not in GENERIC_NAMES
    assert f"def {func}(" in (SRC / f"{module}.py").read_text(encoding="utf-8")
