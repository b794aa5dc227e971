"""
Unit tests for the compact JSON formatter.
"""

import io
import json

from autotile.formats import compact_json


class TestDumps:
    """Tests for compact_json.dumps."""

    def test_numeric_arrays_stay_on_one_line(self):
        text = compact_json.dumps({"tiles": [[0, 1, 2], [3, 4, 5]]})
        assert "[0, 1, 2]" in text
        assert "[3, 4, 5]" in text

    def test_nested_structures_are_indented(self):
        text = compact_json.dumps({"name": "x", "tiles": [{"id": 1}]})
        assert text.splitlines() == [
            "{",
            '  "name": "x",',
            '  "tiles": [',
            "    {",
            '      "id": 1',
            "    }",
            "  ]",
            "}",
        ]

    def test_output_is_valid_json(self):
        data = {"a": [1, 2.5, -3], "b": [], "c": {}, "d": [True, None], "e": "text"}
        assert json.loads(compact_json.dumps(data)) == data


def test_dump_adds_trailing_newline():
    buf = io.StringIO()
    compact_json.dump([1, 2], buf)
    assert buf.getvalue() == "[1, 2]\n"
