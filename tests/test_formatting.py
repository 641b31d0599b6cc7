"""Tests for the three output styles."""

from __future__ import annotations

import json

import pytest

from jsonwrite import FormatMode, JsonWriter, WriterConfig


def _run(config: WriterConfig, ops) -> str:
    buf = bytearray(512)
    w = JsonWriter(buf, config=config)
    ops(w)
    return buf[: w.finish()].decode("utf-8")


def _example(w: JsonWriter) -> None:
    w.open_object()
    w.write_key("a")
    w.write_int(1)
    w.write_key("b")
    w.open_array()
    w.write_bool(True)
    w.write_null()
    w.close()
    w.close()


def _mixed(w: JsonWriter) -> None:
    w.open_array()
    w.write_string("x")
    w.open_object()
    w.write_key("k")
    w.open_array()
    w.close()
    w.write_key("m")
    w.open_object()
    w.close()
    w.close()
    w.write_int(-3)
    w.close()


class TestCompactAndNormal:
    """Compact has no whitespace; normal adds one space after ':' and ','."""

    def test_default_mode_is_compact(self) -> None:
        assert WriterConfig().mode is FormatMode.COMPACT

    def test_reference_example_normal(self) -> None:
        assert _run(WriterConfig.normal(), _example) == '{"a": 1, "b": [true, null]}'

    def test_reference_example_compact(self) -> None:
        assert _run(WriterConfig.compact(), _example) == '{"a":1,"b":[true,null]}'

    @pytest.mark.parametrize("ops", [_example, _mixed])
    def test_normal_is_compact_plus_single_spaces(self, ops) -> None:
        compact = _run(WriterConfig.compact(), ops)
        normal = _run(WriterConfig.normal(), ops)
        assert normal.replace(": ", ":").replace(", ", ",") == compact
        assert json.loads(normal) == json.loads(compact)


class TestPretty:
    """Pretty mode indents by indent_unit per open container."""

    def test_reference_example_matches_json_dumps(self) -> None:
        text = _run(WriterConfig.pretty(2), _example)
        assert text == json.dumps({"a": 1, "b": [True, None]}, indent=2)

    def test_indent_unit_four(self) -> None:
        text = _run(WriterConfig.pretty(4), _example)
        assert text == json.dumps({"a": 1, "b": [True, None]}, indent=4)

    def test_empty_containers_stay_on_one_line(self) -> None:
        def ops(w: JsonWriter) -> None:
            w.open_array()
            w.open_array()
            w.close()
            w.open_object()
            w.close()
            w.close()

        assert _run(WriterConfig.pretty(), ops) == "[\n  [],\n  {}\n]"

    def test_top_level_scalar_has_no_whitespace(self) -> None:
        def ops(w: JsonWriter) -> None:
            w.write_int(42)

        assert _run(WriterConfig.pretty(), ops) == "42"

    def test_mixed_document(self) -> None:
        text = _run(WriterConfig.pretty(2), _mixed)
        assert text == json.dumps(["x", {"k": [], "m": {}}, -3], indent=2)

    def test_zero_indent_still_breaks_lines(self) -> None:
        text = _run(WriterConfig.pretty(0), _example)
        assert text == '{\n"a": 1,\n"b": [\ntrue,\nnull\n]\n}'

    def test_config_can_change_between_sessions(self) -> None:
        buf = bytearray(128)
        w = JsonWriter(buf)
        _example(w)
        assert buf[: w.finish()] == b'{"a":1,"b":[true,null]}'
        w.init(buf, config=WriterConfig.normal())
        _example(w)
        assert buf[: w.finish()] == b'{"a": 1, "b": [true, null]}'
