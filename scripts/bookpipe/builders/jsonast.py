"""
JSON builder.

Dumps pandoc's document AST for debugging filters. No template.
"""

from bookpipe.builders.base import PandocBuilder


class JsonBuilder(PandocBuilder):
    format_name = "JSON AST"
    target_name = "json"
