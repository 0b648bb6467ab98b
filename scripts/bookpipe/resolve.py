"""
Project resolution and input checks.

Finds the project root that holds build.yaml and verifies that every
path-bearing input of a target exists before pandoc is launched.
"""

import os

from bookpipe.config import CONFIG_FILENAME


def find_project_root(start):
    """
    Walk up from `start` to the first directory containing build.yaml.

    Returns: absolute path to the project root, or None.
    """
    current = os.path.abspath(start)
    while True:
        if os.path.exists(os.path.join(current, CONFIG_FILENAME)):
            return current
        parent = os.path.dirname(current)
        if parent == current:
            return None
        current = parent


def missing_pages(config):
    """Manifest entries whose files do not exist, in manifest order."""
    return [
        page for page in config.page_paths()
        if not os.path.exists(config.path(page))
    ]


def missing_inputs(config, target):
    """
    Pages, template and metadata files of `target` that do not exist.

    Filters are not checked: they may be executables found on PATH
    (e.g. pandoc-crossref) rather than files in the project.
    """
    missing = missing_pages(config)
    if target.template and not os.path.exists(config.path(target.template)):
        missing.append(target.template)
    for path in target.metadata:
        if not os.path.exists(config.path(path)):
            missing.append(path)
    return missing


def ensure_parent(path):
    """Create the directory that will hold `path`."""
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
