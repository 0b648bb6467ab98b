"""
Distribution archive builders.

FetchBuilder downloads the exercise code archive with curl; ZipBuilder
packs the built PDF, HTML and EPUB plus that archive with zip.
"""

import os

from bookpipe.builders.base import BaseBuilder
from bookpipe.config import ALL_TARGETS
from bookpipe.process import Success

CURL = "curl"
ZIP = "zip"


class FetchBuilder(BaseBuilder):
    format_name = "code archive"

    def header(self):
        print(f"\n{'─' * 60}")
        print(f"  Fetching {self.format_name}: {self.config.code_archive.url}")
        print(f"{'─' * 60}")

    def command(self):
        archive = self.config.code_archive
        return [CURL, "--fail", "--location", "--silent", "--show-error",
                "--output", archive.output, archive.url]

    def build(self):
        self.header()
        self.prepare_output(self.config.code_archive.output)

        outcome = self.exec_cmd(self.command(), "Download")
        if not outcome.ok:
            return outcome

        print(f"  ✓ {self.config.code_archive.output}")
        return Success()


class ZipBuilder(BaseBuilder):
    format_name = "ZIP"

    def members(self):
        """Built artifacts that go into the archive, in a fixed order."""
        files = [self.config.targets[name].output for name in ALL_TARGETS]
        files.append(self.config.code_archive.output)
        return files

    def command(self):
        # -j: store files without their dist/ prefix
        return [ZIP, "-j", self.config.zip_output] + self.members()

    def build(self):
        self.header()

        output = self.config.path(self.config.zip_output)
        if os.path.exists(output):
            os.remove(output)

        outcome = self.exec_cmd(self.command(), "Archive")
        if not outcome.ok:
            return outcome

        print(f"  ✓ {self.config.zip_output}")
        return Success()
