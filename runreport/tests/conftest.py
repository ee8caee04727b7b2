from __future__ import annotations

import json
from typing import Any, Callable

import pytest

from runreport.payload import BytesContainer
from runreport.record import FunctionRunResult

INPUT_JSON = b'{"input_test": "input_value"}'


@pytest.fixture
def json_input() -> BytesContainer:
    return BytesContainer.json_input(INPUT_JSON)


@pytest.fixture
def make_result(json_input: BytesContainer) -> Callable[..., FunctionRunResult]:
    """Factory for run results with the usual small test payloads."""

    def _make(**overrides: Any) -> FunctionRunResult:
        fields: dict[str, Any] = {
            "name": "test",
            "size": 100,
            "memory_usage": 1000,
            "instructions": 1001,
            "logs": "test",
            "input": json_input,
            "output": BytesContainer.json_output(json.dumps({"test": "test"}).encode()),
            "profile": None,
            "scale_factor": 1.0,
            "success": True,
        }
        fields.update(overrides)
        return FunctionRunResult(**fields)

    return _make


@pytest.fixture(autouse=True)
def _clear_scale_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("RUNREPORT_SCALE_FACTOR", raising=False)
