from bookpipe.builders.archive import FetchBuilder, ZipBuilder
from bookpipe.builders.assets import ScriptBuilder, StyleBuilder
from bookpipe.builders.epub import EpubBuilder
from bookpipe.builders.html import HtmlBuilder
from bookpipe.builders.jsonast import JsonBuilder
from bookpipe.builders.pdf import PdfBuilder

BUILDERS = {
    "css": StyleBuilder,
    "js": ScriptBuilder,
    "pdf": PdfBuilder,
    "html": HtmlBuilder,
    "epub": EpubBuilder,
    "json": JsonBuilder,
    "fetch": FetchBuilder,
    "zip": ZipBuilder,
}
