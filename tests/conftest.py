from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Isolation of the persisted configuration file.
3. Shared fixtures for configuration dictionaries and sample directories.
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def isolated_config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point ARBORIZE_CONFIG at a per-test location that does not exist yet."""
    config_path = tmp_path / "arborize-config" / "config.json"
    monkeypatch.setenv("ARBORIZE_CONFIG", str(config_path))
    return config_path


@pytest.fixture
def mock_config_dict() -> Dict[str, Any]:
    """
    Return a valid, complete configuration dictionary for testing.

    Reflects the structure defined in 'arborize.domain.config'.

    Returns:
        Dict[str, Any]: A sample configuration dictionary.
    """
    return {
        "input_path": "/tmp/test_input",
        "show_hidden": False,
        "follow_symlinks": False,
        "dirs_first": True,
        "max_depth": 3,
        "effectful": False,
        "timeout_seconds": 2.5,
        "output_format": "ascii",
        "log_level": "INFO",
        "log_file": None,
    }


@pytest.fixture
def project_structure(tmp_path: Path) -> Path:
    """
    Create a temporary directory structure for tree building.

    Structure:
    /project
      /src
        /pkg
          core.py
        main.py
      /tests
        test_main.py
      .hidden
      README.md
    """
    root = tmp_path / "project"
    root.mkdir()

    src = root / "src"
    src.mkdir()
    (src / "main.py").write_text("print('hi')", encoding="utf-8")
    pkg = src / "pkg"
    pkg.mkdir()
    (pkg / "core.py").write_text("X = 1", encoding="utf-8")

    tests = root / "tests"
    tests.mkdir()
    (tests / "test_main.py").write_text("def test_one(): pass", encoding="utf-8")

    (root / ".hidden").write_text("secret", encoding="utf-8")
    (root / "README.md").write_text("# Docs", encoding="utf-8")

    return root
