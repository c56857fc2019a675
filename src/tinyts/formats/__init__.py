"""Text formats for terms and types, built on ``tinyts.codecs``."""

from tinyts.formats.json import from_json, load_json, to_json

__all__ = ["from_json", "load_json", "to_json"]
