"""
Task lists.

A Task pairs a name with the callable that runs it. Composite commands
(`all`, `zip`, the html target with its assets) are plain ordered lists
of tasks built from the configuration, run front to back with early exit
on the first failure.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional

from bookpipe.builders import BUILDERS
from bookpipe.config import ALL_TARGETS, TARGET_NAMES, ConfigError
from bookpipe.process import ExitOutcome, Success


@dataclass(frozen=True)
class Task:
    name: str
    run: Callable[[], ExitOutcome]
    check: Optional[Callable[[], None]] = None


def run_tasks(tasks: List[Task]) -> ExitOutcome:
    """
    Run tasks in order and stop at the first failure.

    Every task's check runs before anything is launched, so a missing
    input aborts the whole list with ConfigError up front.
    """
    for task in tasks:
        if task.check:
            task.check()

    for task in tasks:
        outcome = task.run()
        if not outcome.ok:
            return outcome
    return Success()


class Plans:
    """
    Builds task lists for one configuration.

    Usage:
        plans = Plans(config, sink=ConsoleSink(), verbose=True)
        run_tasks(plans.target("html"))   # css, js, html
        run_tasks(plans.all())            # css, js, pdf, html, epub
    """

    def __init__(self, config, sink=None, verbose=False):
        self.config = config
        self.sink = sink
        self.verbose = verbose

    def single(self, name) -> Task:
        """One task by name: css, js, a target, fetch or zip."""
        try:
            builder_cls = BUILDERS[name]
        except KeyError:
            raise ConfigError(f"Unknown task '{name}'")
        builder = builder_cls(self.config, sink=self.sink, verbose=self.verbose)
        return Task(name, builder.build, builder.check)

    def assets(self) -> List[Task]:
        return [self.single("css"), self.single("js")]

    def target(self, name) -> List[Task]:
        if name not in TARGET_NAMES:
            raise ConfigError(
                f"Unknown target '{name}' (expected one of {', '.join(TARGET_NAMES)}, all)"
            )
        if name == "html":
            return self.assets() + [self.single("html")]
        return [self.single(name)]

    def all(self) -> List[Task]:
        return self.assets() + [self.single(name) for name in ALL_TARGETS]

    def zip(self) -> List[Task]:
        return self.all() + [self.single("fetch"), self.single("zip")]

    def named(self, names) -> List[Task]:
        """Tasks for a list of names, each exactly once, as listed."""
        return [self.single(name) for name in names]
