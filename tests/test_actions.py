from pathlib import Path

import pytest

from conftest import read_outputs
from update_project.utils import actions


def test_set_output_writes_github_output(github_output: Path) -> None:
    actions.set_output("field_read_value", "Done")
    actions.set_output("field_updated_value", None)

    assert read_outputs(github_output) == {"field_read_value": "Done", "field_updated_value": ""}


def test_set_output_serializes_non_strings(github_output: Path) -> None:
    actions.set_output("count", 5.5)

    assert read_outputs(github_output) == {"count": "5.5"}


def test_set_output_writes_whole_numbers_without_fraction(github_output: Path) -> None:
    actions.set_output("as_float", 8.0)
    actions.set_output("as_int", 8)

    assert read_outputs(github_output) == {"as_float": "8", "as_int": "8"}


def test_set_output_keeps_multiline_values(github_output: Path) -> None:
    actions.set_output("text", "line 1\nline 2")

    assert read_outputs(github_output) == {"text": "line 1\nline 2"}


def test_set_output_falls_back_to_workflow_command(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.delenv("GITHUB_OUTPUT")

    actions.set_output("field_read_value", "50% done\nnext")

    assert "::set-output name=field_read_value::50%25 done%0Anext" in capsys.readouterr().out


def test_set_failed_marks_run_failed(capsys: pytest.CaptureFixture[str]) -> None:
    assert actions.get_exit_code() == 0

    actions.set_failed("first")
    actions.set_failed("Field not found\nwith Name x")

    assert actions.get_exit_code() == 1
    assert actions.get_failed_message() == "Field not found\nwith Name x"
    assert "::error::Field not found%0Awith Name x" in capsys.readouterr().out


def test_reset_clears_failure() -> None:
    actions.set_failed("boom")
    actions.reset()

    assert actions.get_exit_code() == 0
    assert actions.get_failed_message() is None
