from __future__ import annotations

"""
Unit tests for the CLI Application Controller.

Runs main() in-process and checks exit codes, stdout and stderr.
"""

import json
import time
from pathlib import Path

import pytest

from arborize.infra.logging import shutdown_logging
from arborize.interface.cli.app import main


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    shutdown_logging()


def test_tree_command_prints_tree(project_structure: Path, capsys) -> None:
    code = main(["--use-defaults", "tree", str(project_structure), "--max-depth", "1"])
    out = capsys.readouterr().out.splitlines()

    assert code == 0
    assert out == ["project/", "├── README.md", "├── src/", "└── tests/"]


def test_divisors_command_json(capsys) -> None:
    code = main(["--use-defaults", "divisors", "12", "--json"])
    doc = json.loads(capsys.readouterr().out)

    assert code == 0
    assert doc["total_nodes"] == 11
    assert [c["label"] for c in doc["tree"]["children"]] == [1, 2, 3, 4, 6]


def test_missing_path_exit_code(tmp_path: Path, capsys) -> None:
    code = main(["--use-defaults", "tree", str(tmp_path / "missing")])

    assert code == 2
    assert "does not exist" in capsys.readouterr().err


def test_non_positive_divisor_root(capsys) -> None:
    assert main(["--use-defaults", "divisors", "0"]) == 2


def test_no_command_prints_help(capsys) -> None:
    assert main(["--use-defaults"]) == 2
    assert "usage" in capsys.readouterr().err


def test_dump_config_merges_persisted_file(isolated_config_file: Path, capsys) -> None:
    isolated_config_file.parent.mkdir(parents=True)
    isolated_config_file.write_text(json.dumps({"dirs_first": True}), encoding="utf-8")

    assert main(["--dump-config", "tree", "--hidden"]) == 0
    conf = json.loads(capsys.readouterr().out)

    assert conf["dirs_first"] is True
    assert conf["show_hidden"] is True


def test_build_failure_exit_code(project_structure: Path, capsys, monkeypatch) -> None:
    def denied(path):
        raise PermissionError(f"denied: {path}")

    monkeypatch.setattr("arborize.infra.fs.os.scandir", denied)
    code = main(["--use-defaults", "tree", str(project_structure)])

    assert code == 1
    assert "PermissionError: denied" in capsys.readouterr().err


def test_keyboard_interrupt_exit_code(capsys, monkeypatch) -> None:
    def interrupted(*args, **kwargs):
        raise KeyboardInterrupt

    monkeypatch.setattr("arborize.interface.cli.app.generate_divisor_tree", interrupted)

    assert main(["--use-defaults", "divisors", "12"]) == 130
    assert "Interrupted." in capsys.readouterr().err


def test_timeout_failure_message(project_structure: Path, capsys, monkeypatch) -> None:
    def slow_listing(entry, **kwargs):
        time.sleep(1.0)
        return []

    monkeypatch.setattr("arborize.infra.fs.list_entries", slow_listing)
    code = main(["--use-defaults", "tree", str(project_structure), "--async", "--timeout", "0.1"])
    err = capsys.readouterr().err

    assert code == 1
    assert "ERROR: Directory listing exceeded the 0.1s timeout." in err
    assert "TimeoutError: TimeoutError" not in err


def test_tree_input_path_expands_environment(project_structure: Path, capsys, monkeypatch) -> None:
    monkeypatch.setenv("ARBORIZE_SCAN_ROOT", str(project_structure))

    code = main(["--use-defaults", "tree", "$ARBORIZE_SCAN_ROOT", "--max-depth", "0"])

    assert code == 0
    assert capsys.readouterr().out.splitlines() == ["project/"]


def test_save_config_persists_effective_config(isolated_config_file: Path, capsys) -> None:
    assert main(["--use-defaults", "--save-config", "divisors", "6", "--json"]) == 0
    saved = json.loads(isolated_config_file.read_text(encoding="utf-8"))

    assert saved["output_format"] == "json"

    capsys.readouterr()
    assert main(["--dump-config"]) == 0
    assert json.loads(capsys.readouterr().out)["output_format"] == "json"


def test_save_config_without_command(isolated_config_file: Path) -> None:
    assert main(["--use-defaults", "--save-config"]) == 0
    assert isolated_config_file.exists()
