"""
Shared pytest fixtures and utilities for the romnames test suite.
"""

from pathlib import Path
from typing import Dict, Any, Callable

import pytest
import yaml


@pytest.fixture
def project_root() -> Path:
    """
    Repository root path for locating fixtures and sample data.
    """
    return Path(__file__).resolve().parent.parent


@pytest.fixture
def data_dir(project_root: Path) -> Path:
    """
    Path to shared static test fixtures (DAT XML, YAML).
    """
    return project_root / "tests" / "data"


@pytest.fixture
def dat_file(tmp_path: Path, data_dir: Path) -> Callable[[str], Path]:
    """
    Copy a DAT fixture from tests/data/dats into the temp workspace.

    Usage:
        path = dat_file("nointro.dat")
    """

    def _copy(name: str) -> Path:
        source = data_dir / "dats" / name
        dest = tmp_path / name
        dest.write_text(source.read_text(encoding="utf-8"), encoding="utf-8")
        return dest

    return _copy


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[[Dict[str, Any]], Path]:
    """
    Create a minimal config.yaml in a temp directory.

    Usage:
        path = make_config({"naming": {"strict": True}})
    """

    def _builder(overrides: Dict[str, Any] | None = None) -> Path:
        base = {
            "logging": {"level": "WARNING", "console": True},
            "naming": {"convention": "auto"},
            "output": {"format": "plain"},
        }
        if overrides:
            base = merge_dicts(base, overrides)

        cfg_path = tmp_path / "config.yaml"
        cfg_path.write_text(yaml.safe_dump(base))
        return cfg_path

    return _builder


def merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow+deep merge helper for fixture config dictionaries.
    """
    result: Dict[str, Any] = dict(base)
    for key, value in override.items():
        if (
            key in result
            and isinstance(result[key], dict)
            and isinstance(value, dict)
        ):
            result[key] = merge_dicts(result[key], value)
        else:
            result[key] = value
    return result
