"""JSON format adapter.

The parser emits one JSON document per program: a single tagged term whose
nodes carry ``loc`` spans. ``load_json`` reads such a file directly.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

from tinyts.codecs import from_builtins, to_builtins

if TYPE_CHECKING:
    from os import PathLike

    from tinyts.nodes import TermNode
    from tinyts.types import TypeNode


def to_json(
    obj: TermNode | TypeNode,
    *,
    indent: int | None = 2,
    sort_keys: bool = False,
) -> str:
    """Render a term or type as parser-compatible JSON.

    ``indent=None`` gives a single line; ``sort_keys`` makes the output
    stable for diffs.
    """
    return json.dumps(to_builtins(obj), indent=indent, sort_keys=sort_keys)


def from_json(s: str | bytes) -> TermNode | TypeNode:
    """Decode a JSON document holding one tagged term or type.

    Raises:
        ValueError: If the text is not JSON, the top level is not an
            object, or a tag is unknown.
        KeyError: If the top-level object has no ``tag``.

    """
    data = json.loads(s)
    if not isinstance(data, dict):
        msg = f"Expected a tagged JSON object, got {type(data).__name__}"
        raise ValueError(msg)
    return from_builtins(data)


def load_json(path: str | PathLike[str]) -> TermNode | TypeNode:
    """Decode a parser output file."""
    return from_json(Path(path).read_bytes())
