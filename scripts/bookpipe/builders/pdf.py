"""
PDF builder.

Pipeline: pandoc renders the manifest through the LaTeX template and the
configured filters; the PDF engine named by --pdf-engine must be on PATH.
"""

from bookpipe.builders.base import PandocBuilder
from bookpipe.process import NOT_FOUND_EXIT, Failure

DEFAULT_ENGINE = "xelatex"


class PdfBuilder(PandocBuilder):
    format_name = "PDF"
    target_name = "pdf"

    @property
    def engine(self):
        for arg in self.target.extra_args:
            if arg.startswith("--pdf-engine="):
                return arg.split("=", 1)[1]
        return DEFAULT_ENGINE

    def build(self):
        if not self.check_tool(self.engine):
            print("  Install TeX Live or MacTeX:")
            print("    macOS:  brew install --cask mactex")
            print("    Ubuntu: sudo apt install texlive-xetex texlive-fonts-extra")
            return Failure(NOT_FOUND_EXIT)
        return super().build()
