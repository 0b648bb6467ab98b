"""
Watch mode: rerun task lists when source files change.

Polls file modification times for each watch group's glob patterns. A
group fires when a matching file is added, removed or modified, and its
task list is rerun from scratch.

Everything runs on one thread. Changes made while a task list is running
are picked up by the next poll once it finishes; several changes to the
same group in that window trigger a single rerun.
"""

import glob
import os
import time
from dataclasses import dataclass
from typing import Dict, List

from bookpipe.config import ConfigError
from bookpipe.tasks import Task, run_tasks

DEFAULT_INTERVAL = 0.5


@dataclass(frozen=True)
class WatchGroup:
    name: str
    patterns: tuple
    tasks: List[Task]


def expand_patterns(root, patterns):
    """Files under `root` matching any of the (recursive) glob patterns."""
    files = set()
    for pattern in patterns:
        for path in glob.glob(os.path.join(root, pattern), recursive=True):
            if os.path.isfile(path):
                files.add(path)
    return files


def snapshot(root, patterns) -> Dict[str, float]:
    """Map of file -> mtime for everything the patterns match."""
    state = {}
    for path in expand_patterns(root, patterns):
        try:
            state[path] = os.stat(path).st_mtime
        except OSError:
            pass  # deleted between glob and stat
    return state


class Watcher:
    """
    Polling file watcher over ordered watch groups.

    Usage:
        watcher = Watcher(root, groups)
        watcher.run()            # blocks until Ctrl-C
    """

    def __init__(self, root, groups, interval=DEFAULT_INTERVAL, runner=run_tasks):
        self.root = root
        self.groups = list(groups)
        self.interval = interval
        self.runner = runner
        self.state = {group.name: snapshot(root, group.patterns) for group in self.groups}

    def changed_groups(self):
        """Groups whose files differ from the last snapshot. Updates the snapshot."""
        fired = []
        for group in self.groups:
            current = snapshot(self.root, group.patterns)
            if current != self.state[group.name]:
                self.state[group.name] = current
                fired.append(group)
        return fired

    def poll_once(self):
        """
        Check every group once and rerun the task lists of those that changed.

        Returns the names of the groups that fired, in declaration order.
        """
        fired = self.changed_groups()
        for group in fired:
            print(f"\n  Change detected in {group.name}; running {', '.join(t.name for t in group.tasks)}")
            try:
                outcome = self.runner(group.tasks)
            except ConfigError as e:
                print(f"  Error: {e}")
                continue
            if outcome.ok:
                print(f"  ✓ {group.name} rebuilt")
            else:
                print(f"  ✗ {group.name} rebuild failed (exit {outcome.code})")
        return [group.name for group in fired]

    def run(self):
        print(f"\n  Watching {len(self.groups)} group(s). Press Ctrl-C to stop.")
        while True:
            self.poll_once()
            time.sleep(self.interval)
