"""
Compact JSON formatter that keeps arrays of numbers on single lines.

Tile sets and tile maps are mostly short numeric arrays (patterns and
[x, y, tile] triples), which read far better one per line.
"""

import json


def _is_numeric_array(value) -> bool:
    return isinstance(value, list) and all(
        isinstance(x, (int, float)) and not isinstance(x, bool) for x in value
    )


def dumps(obj, indent: int = 2) -> str:
    """
    Serialize obj to a JSON formatted string.

    Arrays containing only numbers are kept on a single line. Everything
    else is indented normally.
    """

    def format_value(value, level):
        pad = " " * (indent * level)
        child_pad = " " * (indent * (level + 1))

        if isinstance(value, list) and value and not _is_numeric_array(value):
            items = [format_value(x, level + 1) for x in value]
            return "[\n" + ",\n".join(child_pad + item for item in items) + "\n" + pad + "]"

        if isinstance(value, dict) and value:
            items = [
                f"{json.dumps(str(k))}: {format_value(v, level + 1)}"
                for k, v in value.items()
            ]
            return "{\n" + ",\n".join(child_pad + item for item in items) + "\n" + pad + "}"

        return json.dumps(value)

    return format_value(obj, 0)


def dump(obj, fp, indent: int = 2) -> None:
    """Serialize obj to a JSON formatted stream, with a trailing newline."""
    fp.write(dumps(obj, indent))
    fp.write("\n")


def load(fp):
    return json.load(fp)
