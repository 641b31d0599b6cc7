"""Tests for emit_value / render — driving the writer from Python values."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

import pytest

from jsonwrite import (
    ContractViolationError,
    JsonWriter,
    OutOfSpaceError,
    WriterConfig,
    emit_value,
    render,
)


@dataclass
class Point:
    x: int
    y: int


class TestRender:
    def test_round_trip_nested(self) -> None:
        value = {
            "name": "sensor",
            "ok": True,
            "count": -12,
            "tags": ["a", "b"],
            "nested": {"empty": [], "none": None, "deep": [[1], [2, [3]]]},
        }
        assert json.loads(render(value)) == value

    @pytest.mark.parametrize(
        "config",
        [WriterConfig.compact(), WriterConfig.normal(), WriterConfig.pretty(3)],
    )
    def test_round_trip_every_mode(self, config: WriterConfig) -> None:
        value = {"a": 1, "b": [True, None, {"c": "d"}]}
        assert json.loads(render(value, config=config)) == value

    def test_compact_matches_json_dumps(self) -> None:
        value = {"a": 1, "b": [True, None]}
        assert render(value) == json.dumps(value, separators=(",", ":")).encode()

    def test_pretty_matches_json_dumps(self) -> None:
        value = {"list": [1, 2, {"k": "v"}], "obj": {}}
        text = render(value, config=WriterConfig.pretty(2)).decode()
        assert text == json.dumps(value, indent=2)

    def test_paths_and_dataclasses(self) -> None:
        out = render({"p": Path("a") / "b", "pt": Point(1, 2)})
        assert json.loads(out) == {"p": "a/b", "pt": {"x": 1, "y": 2}}

    def test_sets_are_ordered(self) -> None:
        assert render({3, 1, 2}) == b"[1,2,3]"

    def test_tuple_and_non_string_keys(self) -> None:
        assert render({1: (True, False)}) == b'{"1":[true,false]}'

    def test_float_rejected(self) -> None:
        with pytest.raises(TypeError):
            render({"x": 1.5})

    def test_unknown_object_rejected(self) -> None:
        with pytest.raises(TypeError):
            render(object())

    def test_too_small(self) -> None:
        with pytest.raises(OutOfSpaceError):
            render(list(range(100)), size=16)


class TestEmitValue:
    def test_emit_as_key_value(self) -> None:
        buf = bytearray(64)
        w = JsonWriter(buf)
        w.open_object()
        w.write_key("items")
        emit_value(w, [1, 2])
        w.close()
        assert buf[: w.finish()] == b'{"items":[1,2]}'

    def test_emit_into_object_without_key_rejected(self) -> None:
        w = JsonWriter(bytearray(64))
        w.open_object()
        with pytest.raises(ContractViolationError):
            emit_value(w, 1)
