"""Tests for the packaging metadata."""

from pathlib import Path

import pytest

tomllib = pytest.importorskip("tomllib")

PYPROJECT = Path(__file__).resolve().parent.parent / "pyproject.toml"


@pytest.fixture(scope="module")
def pyproject():
    with open(PYPROJECT, "rb") as f:
        return tomllib.load(f)


class TestPackaging:
    """Tests that the server's top-level modules stay out of site-packages."""

    def test_no_top_level_modules_installed(self, pyproject):
        setuptools_cfg = pyproject["tool"]["setuptools"]
        assert setuptools_cfg["packages"] == []
        assert setuptools_cfg["py-modules"] == []

    def test_server_importable_for_tests(self, pyproject):
        assert pyproject["tool"]["pytest"]["ini_options"]["pythonpath"] == ["server"]

    def test_runtime_dependencies_declared(self, pyproject):
        names = {dep.split(">")[0].split("=")[0] for dep in pyproject["project"]["dependencies"]}
        assert names == {"flask", "flask-limiter", "python-dotenv", "requests"}
