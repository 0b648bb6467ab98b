"""
Base builder classes.

BaseBuilder owns what every task shares: console header, verbose logging,
running one external command through an OutputSink and turning its exit
code into an ExitOutcome. PandocBuilder adds manifest + target handling;
format subclasses only set names and format-specific checks.
"""

import shutil
from abc import ABC, abstractmethod

from bookpipe.command import command_line, compose_command
from bookpipe.config import ConfigError
from bookpipe.process import (
    NOT_EXECUTABLE_EXIT,
    NOT_FOUND_EXIT,
    ConsoleSink,
    Failure,
    Success,
    run_command,
)
from bookpipe.resolve import ensure_parent, missing_inputs


class BaseBuilder(ABC):
    """
    Abstract base for build tasks.

    Subclasses must define:
        format_name:  str    — human-readable name ("PDF", "CSS", etc.)
        build():      method — run the task, return an ExitOutcome
    """

    format_name = None  # Override in subclass

    def __init__(self, config, sink=None, verbose=False):
        self.config = config
        self.sink = sink or ConsoleSink()
        self.verbose = verbose

    # ── Logging ────────────────────────────────────────────

    def log(self, msg):
        if self.verbose:
            print(msg)

    def header(self):
        print(f"\n{'─' * 60}")
        print(f"  Building {self.format_name}: {self.config.name}")
        print(f"{'─' * 60}")

    # ── Paths ──────────────────────────────────────────────

    def prepare_output(self, relative):
        """Make sure the directory for a project-relative output exists."""
        ensure_parent(self.config.path(relative))

    # ── Command execution ──────────────────────────────────

    def exec_cmd(self, cmd, label="Command"):
        """
        Run a command from the project root, relaying its output.

        Returns the ExitOutcome; a missing executable is Failure(127),
        one without execute permission Failure(126).
        """
        self.log(f"  $ {command_line(cmd)}")
        try:
            outcome = run_command(cmd, self.sink, cwd=self.config.root)
        except FileNotFoundError:
            print(f"  ✗ {cmd[0]} not found")
            return Failure(NOT_FOUND_EXIT)
        except PermissionError:
            print(f"  ✗ {cmd[0]} is not executable")
            return Failure(NOT_EXECUTABLE_EXIT)

        if not outcome.ok:
            print(f"  ✗ {label} failed (exit {outcome.code})")
        return outcome

    def check_tool(self, name):
        """Check that a required external tool is on PATH."""
        if not shutil.which(name):
            print(f"  ✗ {name} not found on PATH")
            return False
        return True

    def check(self):
        """Raise ConfigError if the task cannot start. Default: nothing to check."""
        pass

    # ── Abstract interface ─────────────────────────────────

    @abstractmethod
    def build(self):
        """
        Execute the build. Returns Success or Failure(code).
        """
        ...


class PandocBuilder(BaseBuilder):
    """One pandoc run: the content manifest compiled for one output target."""

    target_name = None  # Override in subclass

    def __init__(self, config, sink=None, verbose=False, target=None):
        super().__init__(config, sink=sink, verbose=verbose)
        self.target = target or config.targets[self.target_name]

    @property
    def output_file(self):
        return self.target.output

    def command(self):
        return compose_command(
            self.config.page_paths(),
            self.target,
            toc_depth=self.config.toc_depth,
        )

    def check(self):
        missing = missing_inputs(self.config, self.target)
        if missing:
            raise ConfigError(
                f"{self.target.name}: missing input file(s): {', '.join(missing)}"
            )

    def build(self):
        self.header()

        cmd = self.command()
        self.log(f"  Input: {len(self.config.pages)} files")
        if self.target.template:
            self.log(f"  Template: {self.target.template}")

        self.prepare_output(self.output_file)
        outcome = self.exec_cmd(cmd, f"{self.format_name} generation")
        if not outcome.ok:
            if not self.verbose:
                print(f"    {command_line(cmd)}")
            return outcome

        print(f"  ✓ {self.output_file}")
        return Success()
