"""
Build configuration: load, validate, and provide defaults for build.yaml.

The loaded configuration is immutable. Everything the orchestrator needs
(content manifest, per-format target descriptors, asset sources, watch
groups) is constructed once here and passed explicitly to the builders.
"""

import os
import sys
from types import MappingProxyType
from dataclasses import dataclass, field, replace

try:
    import yaml
except ImportError:
    print("Error: PyYAML is required. Install with: pip install pyyaml")
    sys.exit(1)


CONFIG_FILENAME = "build.yaml"

# Output target names, in the order `all` builds them (json is debug-only)
TARGET_NAMES = ["pdf", "html", "epub", "json"]
ALL_TARGETS = ["pdf", "html", "epub"]

# Defaults applied if missing
DEFAULTS = {
    "name": "essential-scala",
    "pages_dir": "src/pages",
    "dist_dir": "dist",
    "toc_depth": 3,
    "minify": False,
    "port": 4000,
}

SHARED_METADATA = "src/meta/metadata.yaml"

# Defaults within each target section. "{dist}" is replaced by dist_dir.
PDF_DEFAULTS = {
    "template": "src/templates/template.tex",
    "metadata": [SHARED_METADATA, "src/meta/pdf.yaml"],
    "filters": ["pandoc-crossref"],
    "extra_args": ["--pdf-engine=xelatex"],
}

HTML_DEFAULTS = {
    "template": "src/templates/template.html",
    "metadata": [SHARED_METADATA, "src/meta/html.yaml"],
    "filters": ["pandoc-crossref"],
    "extra_args": [
        "--css={dist}/temp/main.css",
        "--variable=js:{dist}/temp/main.js",
        "--embed-resources",
    ],
}

EPUB_DEFAULTS = {
    "template": "src/templates/template.epub.html",
    "metadata": [SHARED_METADATA, "src/meta/epub.yaml"],
    "filters": ["pandoc-crossref"],
    "extra_args": [
        "--css=src/css/epub.css",
        "--epub-cover-image=src/covers/epub-cover.png",
    ],
}

JSON_DEFAULTS = {
    "template": None,
    "metadata": [SHARED_METADATA],
    "filters": [],
    "extra_args": ["--to=json"],
}

TARGET_DEFAULTS = {
    "pdf": PDF_DEFAULTS,
    "html": HTML_DEFAULTS,
    "epub": EPUB_DEFAULTS,
    "json": JSON_DEFAULTS,
}

STYLES_DEFAULTS = {
    "source": "src/css/main.less",
    "output": "{dist}/temp/main.css",
}

SCRIPTS_DEFAULTS = {
    "source": "src/js/main.js",
    "output": "{dist}/temp/main.js",
    "transform": None,
}

CODE_ARCHIVE_DEFAULTS = {
    "url": "https://github.com/underscoreio/essential-scala-code/archive/master.zip",
    "output": "{dist}/essential-scala-code.zip",
}

# Watch groups: glob patterns -> ordered task names
WATCH_DEFAULTS = [
    {
        "name": "pages",
        "patterns": ["{pages}/**/*.md", "src/templates/**/*", "src/meta/**/*"],
        "tasks": ["pdf", "html", "epub"],
    },
    {
        "name": "styles",
        "patterns": ["src/css/**/*.less", "src/css/**/*.css"],
        "tasks": ["css", "html"],
    },
    {
        "name": "scripts",
        "patterns": ["src/js/**/*"],
        "tasks": ["js", "html"],
    },
]

TASK_NAMES = ["css", "js"] + TARGET_NAMES


class ConfigError(Exception):
    """Raised when build.yaml is missing or invalid."""
    pass


@dataclass(frozen=True)
class TargetConfig:
    """One output format: where it goes and what pandoc is told about it."""

    name: str
    output: str
    template: str = None
    metadata: tuple = ()
    filters: tuple = ()
    extra_args: tuple = ()


@dataclass(frozen=True)
class AssetConfig:
    source: str
    output: str
    transform: str = None


@dataclass(frozen=True)
class ArchiveConfig:
    url: str
    output: str


@dataclass(frozen=True)
class WatchGroupConfig:
    name: str
    patterns: tuple
    tasks: tuple


@dataclass(frozen=True)
class BuildConfig:
    """
    Loaded, validated build configuration.

    Usage:
        config = BuildConfig.load(project_root)
        config.pages                 # ("intro/index.md", ...)
        config.targets["pdf"].output # "dist/essential-scala.pdf"
        config.page_paths()          # pages joined onto pages_dir
    """

    root: str
    name: str
    pages_dir: str
    dist_dir: str
    toc_depth: int
    minify: bool
    port: int
    pages: tuple
    targets: dict = field(default_factory=dict)
    styles: AssetConfig = None
    scripts: AssetConfig = None
    code_archive: ArchiveConfig = None
    watch: tuple = ()

    @classmethod
    def load(cls, root, path=None):
        """Load and validate build.yaml (or `path`) for a project root."""
        yaml_path = path or os.path.join(root, CONFIG_FILENAME)
        if not os.path.exists(yaml_path):
            raise ConfigError(f"No {CONFIG_FILENAME} found in {root}")

        try:
            with open(yaml_path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"{yaml_path} is not valid YAML: {e}")

        return cls.from_dict(data, root)

    @classmethod
    def from_dict(cls, data, root):
        if not isinstance(data, dict):
            raise ConfigError(
                f"{CONFIG_FILENAME} must be a YAML mapping, got {type(data).__name__}"
            )

        if "pages" not in data:
            raise ConfigError(f"{CONFIG_FILENAME} missing required field: pages")

        settings = dict(DEFAULTS)
        settings.update({k: data[k] for k in DEFAULTS if data.get(k) is not None})
        dist = settings["dist_dir"]

        pages = _string_list(data, "pages")
        duplicates = sorted({p for p in pages if pages.count(p) > 1})
        if duplicates:
            raise ConfigError(f"Duplicate pages in manifest: {', '.join(duplicates)}")

        sections = data.get("targets") or {}
        if not isinstance(sections, dict):
            raise ConfigError("targets must be a mapping of format name to settings")
        unknown = [name for name in sections if name not in TARGET_DEFAULTS]
        if unknown:
            raise ConfigError(
                f"Unknown target(s): {', '.join(unknown)} "
                f"(expected one of {', '.join(TARGET_NAMES)})"
            )

        targets = {
            name: _target(name, settings, sections.get(name) or {})
            for name in TARGET_NAMES
        }

        styles = _section(data, "styles", STYLES_DEFAULTS, dist)
        scripts = _section(data, "scripts", SCRIPTS_DEFAULTS, dist)
        archive = _section(data, "code_archive", CODE_ARCHIVE_DEFAULTS, dist)

        return cls(
            root=os.path.abspath(root),
            name=str(settings["name"]),
            pages_dir=str(settings["pages_dir"]),
            dist_dir=str(dist),
            toc_depth=_integer(settings, "toc_depth"),
            minify=bool(settings["minify"]),
            port=_integer(settings, "port"),
            pages=tuple(pages),
            targets=MappingProxyType(targets),
            styles=AssetConfig(**styles),
            scripts=AssetConfig(**scripts),
            code_archive=ArchiveConfig(**archive),
            watch=_watch_groups(data, settings),
        )

    # ── Convenience ────────────────────────────────────────

    def page_paths(self):
        """Manifest entries joined onto pages_dir, in manifest order."""
        return [os.path.join(self.pages_dir, page) for page in self.pages]

    def path(self, relative):
        """Absolute path for a project-relative path."""
        return os.path.join(self.root, relative)

    def with_minify(self, minify):
        return replace(self, minify=bool(minify))

    @property
    def zip_output(self):
        return os.path.join(self.dist_dir, f"{self.name}.zip")

    def summary(self):
        """Print a short config summary."""
        print(f"\n  Book:   {self.name}")
        print(f"  Source: {os.path.join(self.root, self.pages_dir)}")
        print(f"  Pages:  {len(self.pages)}")
        print(f"  Output: {os.path.join(self.root, self.dist_dir)}")
        if self.minify:
            print("  Minify: on")


# ── Internal helpers ───────────────────────────────────────────────────


def _integer(settings, key):
    value = settings[key]
    if isinstance(value, bool):
        raise ConfigError(f"{key} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{key} must be an integer, got {value!r}")


def _string_list(data, key):
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigError(f"{key} must be a list, got {type(value).__name__}")
    return [str(item) for item in value]


def _expand(value, settings):
    if value is None:
        return None
    return (
        str(value)
        .replace("{dist}", str(settings["dist_dir"]))
        .replace("{pages}", str(settings["pages_dir"]))
    )


def _target(name, settings, section):
    if not isinstance(section, dict):
        raise ConfigError(f"targets.{name} must be a mapping")

    merged = dict(TARGET_DEFAULTS[name])
    merged.update(section)

    output = merged.get("output") or os.path.join(
        "{dist}", f"{settings['name']}.{name}"
    )
    lists = {
        key: tuple(_expand(v, settings) for v in _string_list(merged, key))
        for key in ("metadata", "filters", "extra_args")
    }
    return TargetConfig(
        name=name,
        output=_expand(output, settings),
        template=_expand(merged.get("template"), settings),
        **lists,
    )


def _section(data, key, defaults, dist):
    section = data.get(key) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"{key} must be a mapping")
    merged = dict(defaults)
    merged.update({k: v for k, v in section.items() if k in defaults})
    return {
        k: (str(v).replace("{dist}", str(dist)) if v is not None else None)
        for k, v in merged.items()
    }


def _watch_groups(data, settings):
    groups = data.get("watch")
    if groups is None:
        groups = WATCH_DEFAULTS
    if not isinstance(groups, list):
        raise ConfigError("watch must be a list of groups")

    result = []
    for group in groups:
        if not isinstance(group, dict) or not group.get("name"):
            raise ConfigError("each watch group needs a name, patterns and tasks")
        tasks = _string_list(group, "tasks")
        unknown = [t for t in tasks if t not in TASK_NAMES]
        if unknown:
            raise ConfigError(
                f"watch group '{group['name']}' has unknown task(s): {', '.join(unknown)}"
            )
        result.append(WatchGroupConfig(
            name=str(group["name"]),
            patterns=tuple(_expand(p, settings) for p in _string_list(group, "patterns")),
            tasks=tuple(tasks),
        ))
    return tuple(result)
