from __future__ import annotations

import json
import logging

import pytest
from pydantic import ValidationError

from runreport.limits import LimitSettings, ResourceLimits
from runreport.record import FunctionRunResult


def test_sizes_come_from_payload_bytes(make_result):
    result = make_result()
    assert result.input_size == 28
    assert result.output_size == 15


def test_json_excludes_profile_and_scale_factor(make_result):
    result = make_result(profile="flamegraph", scale_factor=2.0)
    payload = json.loads(result.to_json())
    assert "profile" not in payload
    assert "scale_factor" not in payload
    assert payload["name"] == "test"
    assert payload["instructions"] == 1001
    assert payload["success"] is True


def test_from_json_defaults_local_fields(make_result):
    original = make_result(profile="flamegraph", scale_factor=2.0)
    restored = FunctionRunResult.from_json(original.to_json())
    assert restored.profile is None
    assert restored.scale_factor == 1.0
    assert restored.input == original.input
    assert restored.output == original.output
    assert restored.logs == original.logs


def test_from_json_accepts_caller_scale_factor(make_result):
    restored = FunctionRunResult.from_json(make_result().to_json(), scale_factor=4.0)
    assert restored.scale_factor == 4.0
    with pytest.raises(ValueError):
        FunctionRunResult.from_json(make_result().to_json(), scale_factor=0)


def test_from_json_ignores_persisted_scale_factor(make_result):
    payload = json.loads(make_result().to_json())
    payload["scale_factor"] = 9.0
    assert FunctionRunResult.from_json(json.dumps(payload)).scale_factor == 1.0


@pytest.mark.parametrize("field", ["size", "memory_usage", "instructions"])
def test_counters_must_be_non_negative(make_result, field):
    with pytest.raises(ValidationError):
        make_result(**{field: -1})


def test_scale_factor_must_be_positive(make_result):
    with pytest.raises(ValidationError):
        make_result(scale_factor=0)


def test_record_is_immutable(make_result):
    result = make_result()
    with pytest.raises(ValidationError):
        result.logs = "rewritten"


def test_limits_use_record_scale_factor(make_result):
    assert make_result(scale_factor=2.0).limits() == ResourceLimits(256_000, 40_000, 22_000_000)
    custom = LimitSettings(input_size=10, output_size=10, instructions=10, scale_factor=99)
    assert make_result(scale_factor=0.5).limits(custom) == ResourceLimits(5, 5, 5)


def test_serialization_failure_returns_text(make_result, monkeypatch, caplog):
    result = make_result()

    def _boom(self, **kwargs):
        raise ValueError("cannot serialize")

    monkeypatch.setattr(FunctionRunResult, "model_dump_json", _boom)
    with caplog.at_level(logging.WARNING, logger="runreport.record"):
        assert result.to_json() == "cannot serialize"
    assert "record serialization failed" in caplog.text


def test_str_renders_report(make_result):
    assert "Benchmark Results" in str(make_result())
