"""
HTML builder.

Single self-contained page. Relies on the compiled stylesheet and script
bundle, so the html task list runs css and js first.
"""

from bookpipe.builders.base import PandocBuilder


class HtmlBuilder(PandocBuilder):
    format_name = "HTML"
    target_name = "html"
