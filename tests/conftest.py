import os

import pytest
import yaml

from bookpipe.config import BuildConfig
from bookpipe.process import Success


PROJECT_FILES = [
    "pages/a.md",
    "pages/b.md",
    "src/meta/metadata.yaml",
    "src/meta/pdf.yaml",
    "src/meta/html.yaml",
    "src/meta/epub.yaml",
    "src/templates/template.tex",
    "src/templates/template.html",
    "src/templates/template.epub.html",
    "src/css/main.less",
    "src/css/epub.css",
    "src/covers/epub-cover.png",
    "src/js/main.js",
]


def write_project(root, data=None, files=PROJECT_FILES):
    """Lay out a minimal book project under `root` and return its build.yaml path."""
    for relative in files:
        path = os.path.join(root, relative)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(f"# {relative}\n")

    settings = {"name": "book", "pages_dir": "pages", "pages": ["a.md", "b.md"]}
    settings.update(data or {})
    config_path = os.path.join(root, "build.yaml")
    with open(config_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(settings, f)
    return config_path


@pytest.fixture
def project(tmp_path):
    write_project(str(tmp_path))
    return tmp_path


@pytest.fixture
def config(project):
    return BuildConfig.load(str(project))


class RecordingRunner:
    """Stands in for run_command: records argv and cwd, returns queued outcomes."""

    def __init__(self, outcomes=None):
        self.calls = []
        self.outcomes = list(outcomes or [])

    def __call__(self, cmd, sink, cwd=None):
        self.calls.append((list(cmd), cwd))
        return self.outcomes.pop(0) if self.outcomes else Success()

    @property
    def tools(self):
        return [cmd[0] for cmd, _ in self.calls]


@pytest.fixture
def runner(monkeypatch):
    recorder = RecordingRunner()
    monkeypatch.setattr("bookpipe.builders.base.run_command", recorder)
    monkeypatch.setattr("bookpipe.builders.base.shutil.which", lambda name: f"/usr/bin/{name}")
    return recorder
