"""
EPUB builder.

Pipeline: pandoc → epub, with the epub stylesheet and cover image passed
as extra arguments from the target config.
"""

import os

from bookpipe.builders.base import PandocBuilder


class EpubBuilder(PandocBuilder):
    format_name = "EPUB"
    target_name = "epub"

    def build(self):
        for arg in self.target.extra_args:
            if arg.startswith("--epub-cover-image="):
                cover = arg.split("=", 1)[1]
                if not os.path.exists(self.config.path(cover)):
                    print(f"  Warning: cover image {cover} not found")
        return super().build()
