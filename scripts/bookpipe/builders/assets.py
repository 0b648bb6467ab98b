"""
Stylesheet and script bundle builders.

Both are single calls to external tools: lessc compiles the LESS tree to
one CSS file, browserify bundles the script entry point. The minify
setting compresses the CSS and runs the bundle through uglifyify.
"""

import os
from abc import abstractmethod

from bookpipe.builders.base import BaseBuilder
from bookpipe.config import ConfigError
from bookpipe.process import Success

LESSC = "lessc"
BROWSERIFY = "browserify"


class AssetBuilder(BaseBuilder):
    """Shared source/output handling for one compiled asset."""

    asset_key = None  # "styles" or "scripts"

    def __init__(self, config, sink=None, verbose=False):
        super().__init__(config, sink=sink, verbose=verbose)
        self.asset = getattr(config, self.asset_key)

    def header(self):
        print(f"\n{'─' * 60}")
        print(f"  Compiling {self.format_name}: {self.asset.source}")
        print(f"{'─' * 60}")

    def check(self):
        if not os.path.exists(self.config.path(self.asset.source)):
            raise ConfigError(f"{self.asset_key}: source {self.asset.source} not found")

    @abstractmethod
    def command(self):
        ...

    def build(self):
        self.header()
        self.prepare_output(self.asset.output)

        outcome = self.exec_cmd(self.command(), f"{self.format_name} compilation")
        if not outcome.ok:
            return outcome

        print(f"  ✓ {self.asset.output}")
        return Success()


class StyleBuilder(AssetBuilder):
    format_name = "CSS"
    asset_key = "styles"

    def command(self):
        cmd = [LESSC]
        if self.config.minify:
            cmd.append("--clean-css")
        cmd.extend([self.asset.source, self.asset.output])
        return cmd


class ScriptBuilder(AssetBuilder):
    format_name = "JS"
    asset_key = "scripts"

    def command(self):
        cmd = [BROWSERIFY, self.asset.source]
        if self.asset.transform:
            cmd.extend(["-t", self.asset.transform])
        if self.config.minify:
            cmd.extend(["-g", "uglifyify"])
        cmd.extend(["-o", self.asset.output])
        return cmd
