"""Tests for the repair grammar.

Table-driven cases live in ``tests/fixtures/cases.py``; the classes below
cover exact output text, logging and the Repairer object itself.
"""

import json

import pytest
from loguru import logger

from jsonmend import Repairer, repair_json
from tests.fixtures.cases import RepairCase


class TestRepairCases:
    """Every fixture case repairs to strict JSON equal to its expectation."""

    def test_repaired_output_matches(self, repair_case: RepairCase) -> None:
        result = repair_json(repair_case["input"])
        assert json.loads(result) == json.loads(repair_case["expected"])


class TestOutputText:
    """The emitted text is compact: no whitespace is carried over between tokens."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ('{"a": 1,}', '{"a":1}'),
            ("[1, 2, 3,]", "[1,2,3]"),
            ("{'name': 'John'}", '{"name":"John"}'),
            ('{"a": 1, "b":', '{"a":1,"b":null}'),
            ('callback({"a":1})', '{"a":1}'),
            ('```json\n{"a":1}\n```', '{"a":1}'),
            ("True", "true"),
            ("  42  ", "42"),
        ],
    )
    def test_exact_output(self, text: str, expected: str) -> None:
        assert repair_json(text) == expected

    def test_string_content_is_verbatim(self) -> None:
        assert repair_json('"  spaced  out  "') == '"  spaced  out  "'

    def test_bare_token_with_quote_is_escaped(self) -> None:
        result = repair_json('{a"b: 1}')
        assert result == '{"a\\"b":1}'
        assert json.loads(result) == {'a"b': 1}


class TestRepairer:
    def test_repairer_matches_function(self) -> None:
        text = "{name: 'John', tags: ['a', 'b',]}"
        assert Repairer(text).repair() == repair_json(text)

    def test_cursor_stops_after_top_level_value(self) -> None:
        repairer = Repairer('{"a": 1} tail')
        repairer.repair()
        assert repairer.pos == len('{"a": 1} ')

    def test_wrapper_only_stripped_at_top_level(self) -> None:
        assert repair_json("[callback(1)]") == '["callback(1)"]'


class TestLogging:
    """Recovery actions are reported at DEBUG level."""

    def test_truncation_is_logged(self, debug_messages) -> None:
        repair_json('{"a": [1, 2')
        assert any("closing with ']'" in m for m in debug_messages)
        assert any("closing with '}'" in m for m in debug_messages)

    def test_trailing_comma_is_logged(self, debug_messages) -> None:
        repair_json("[1, 2,]")
        assert any("trailing comma" in m for m in debug_messages)

    def test_envelope_is_logged(self, debug_messages) -> None:
        repair_json("cb([1])")
        assert any("JSONP wrapper cb" in m for m in debug_messages)

    def test_trailing_content_is_logged(self, debug_messages) -> None:
        repair_json("[1] extra")
        assert any("Ignoring 5 trailing character(s)" in m for m in debug_messages)

    def test_silent_by_default(self) -> None:
        messages = []
        sink_id = logger.add(messages.append, level="DEBUG")
        try:
            repair_json('{"a": 1')
        finally:
            logger.remove(sink_id)
        assert messages == []
