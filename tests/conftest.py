"""Shared test fixtures for update-project tests."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import pytest

from update_project.utils import actions


class FakeGitHubClient:
    """Stand-in for GitHubClient that replays canned responses.

    Responses are queued per operation; the operation is picked by the first
    registered marker found in the query text.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.retry_flags: list[tuple[str, bool]] = []
        self._responses: dict[str, list[dict[str, Any]]] = {}

    def add_response(self, marker: str, data: dict[str, Any]) -> None:
        self._responses.setdefault(marker, []).append(data)

    async def execute_query(
        self, query: str, variables: dict[str, Any] | None = None, retry: bool = True
    ) -> dict[str, Any]:
        self.calls.append((query, variables or {}))
        self.retry_flags.append((query, retry))
        for marker, queue in self._responses.items():
            if marker in query:
                if not queue:
                    raise AssertionError(f"No response left for {marker}")
                return queue.pop(0)
        raise AssertionError(f"Unexpected query: {query[:80]}")

    def calls_for(self, marker: str) -> list[dict[str, Any]]:
        return [variables for query, variables in self.calls if marker in query]

    def retry_for(self, marker: str) -> list[bool]:
        return [retry for query, retry in self.retry_flags if marker in query]

    def pending(self) -> dict[str, int]:
        return {marker: len(queue) for marker, queue in self._responses.items() if queue}


def project_item(number: int, login: str, item_id: str = "PVTI_1", field: dict | None = None) -> dict[str, Any]:
    """A projectItems node as returned by the content query."""
    return {"id": item_id, "project": {"number": number, "owner": {"login": login}}, "field": field}


def content_response(title: str, *items: dict[str, Any], node_id: str = "I_1") -> dict[str, Any]:
    """A content metadata query response."""
    return {"node": {"id": node_id, "title": title, "projectItems": {"nodes": list(items)}}}


def project_response(project_id: str | None, *fields: dict[str, Any]) -> dict[str, Any]:
    """A project metadata query response."""
    if project_id is None:
        return {"repositoryOwner": {"projectV2": None}}
    return {"repositoryOwner": {"projectV2": {"id": project_id, "fields": {"nodes": list(fields)}}}}


def single_select_field(name: str = "testField", options: dict[str, str] | None = None) -> dict[str, Any]:
    options = options if options is not None else {"testValue": "OPT_1"}
    return {
        "id": "FIELD_1",
        "name": name,
        "dataType": "SINGLE_SELECT",
        "options": [{"id": option_id, "name": option_name} for option_name, option_id in options.items()],
    }


def read_outputs(path: Path) -> dict[str, str]:
    """Parse a GITHUB_OUTPUT file into a name -> value mapping."""
    outputs: dict[str, str] = {}
    lines = path.read_text(encoding="utf-8").splitlines() if path.exists() else []
    index = 0
    while index < len(lines):
        name, delimiter = lines[index].split("<<", 1)
        value_lines = []
        index += 1
        while lines[index] != delimiter:
            value_lines.append(lines[index])
            index += 1
        outputs[name] = "\n".join(value_lines)
        index += 1
    return outputs


@pytest.fixture(autouse=True)
def action_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate workflow command state, inputs and the output file per test."""
    for key in list(os.environ):
        if key.startswith("INPUT_"):
            monkeypatch.delenv(key)
    output_path = tmp_path / "github_output"
    monkeypatch.setenv("GITHUB_OUTPUT", str(output_path))
    monkeypatch.chdir(tmp_path)
    actions.reset()
    yield output_path
    actions.reset()


@pytest.fixture
def github_output(action_env: Path) -> Path:
    return action_env


@pytest.fixture
def fake_client() -> FakeGitHubClient:
    return FakeGitHubClient()
