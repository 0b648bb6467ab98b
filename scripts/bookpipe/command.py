"""
Pandoc command composition.

Turns a content manifest and one target descriptor into the argv for a
single pandoc run. Pure: no filesystem access, no clock, no randomness.
"""

import shlex


PANDOC = "pandoc"

# Fixed, format-independent markdown dialect. `smart` gives smart typography.
MARKDOWN_EXTENSIONS = [
    "smart",
    "grid_tables",
    "multiline_tables",
    "fenced_code_blocks",
    "fenced_code_attributes",
    "yaml_metadata_block",
    "implicit_figures",
    "header_attributes",
    "definition_lists",
    "link_attributes",
]

FROM_FLAG = "--from=markdown+" + "+".join(MARKDOWN_EXTENSIONS)

HIGHLIGHT_STYLE = "tango"


def filter_flag(name):
    """Lua filters run inside pandoc; anything else is a JSON filter executable."""
    if name.endswith(".lua"):
        return f"--lua-filter={name}"
    return f"--filter={name}"


def global_flags(output, toc_depth):
    return [
        f"--output={output}",
        "--top-level-division=chapter",
        "--number-sections",
        "--table-of-contents",
        f"--toc-depth={toc_depth}",
        f"--highlight-style={HIGHLIGHT_STYLE}",
        "--standalone",
    ]


def compose_command(pages, target, toc_depth=3):
    """
    Build the pandoc argv for `target`.

    Order: pandoc, global flags, template, dialect, metadata files,
    filters, extra args, then every page exactly as listed.
    """
    cmd = [PANDOC]
    cmd.extend(global_flags(target.output, toc_depth))

    if target.template:
        cmd.append(f"--template={target.template}")

    cmd.append(FROM_FLAG)
    cmd.extend(f"--metadata-file={path}" for path in target.metadata)
    cmd.extend(filter_flag(name) for name in target.filters)
    cmd.extend(target.extra_args)
    cmd.extend(pages)
    return cmd


def command_line(cmd):
    """Render an argv as a single shell string, quoting only where needed."""
    return shlex.join(cmd)
