"""
Command-line interface for the book build.

Usage:
    bookpipe build pdf              Build the PDF
    bookpipe build all --minify     Build css, js, pdf, html, epub (minified assets)
    bookpipe html                   Same as `build html`
    bookpipe watch                  Build all, serve dist/, rebuild on change
    bookpipe zip                    Build all, fetch the code archive, zip it all
    bookpipe show epub              Print the pandoc command for a target

Requires: pandoc, PyYAML
Optional: xelatex (PDF), lessc + browserify (HTML assets), curl + zip (zip)
"""

import argparse
import os
import sys

from bookpipe.builders import BUILDERS
from bookpipe.command import command_line
from bookpipe.config import TARGET_NAMES, BuildConfig, ConfigError
from bookpipe.process import ConsoleSink
from bookpipe.resolve import find_project_root
from bookpipe.serve import serve
from bookpipe.tasks import Plans, run_tasks
from bookpipe.watch import DEFAULT_INTERVAL, WatchGroup, Watcher

CONFIG_ERROR_EXIT = 2
BUILD_CHOICES = TARGET_NAMES + ["all"]


# ── Resolve project ────────────────────────────────────────────────────


def load_config(args):
    """Find build.yaml and load it. Raises ConfigError on failure."""
    if args.config:
        root = os.path.dirname(os.path.abspath(args.config))
        config = BuildConfig.load(root, path=args.config)
    else:
        root = find_project_root(os.getcwd())
        if not root:
            raise ConfigError(
                f"Could not find build.yaml in {os.getcwd()} or any parent directory"
            )
        config = BuildConfig.load(root)

    if args.minify:
        config = config.with_minify(True)
    return config


def plans_for(config, args):
    return Plans(config, sink=ConsoleSink(), verbose=args.verbose)


def finish(outcome, label):
    print(f"\n{'─' * 60}")
    if outcome.ok:
        print(f"  Done. {label} built successfully.")
        return 0
    print(f"  ✗ {label} failed (exit {outcome.code})")
    return outcome.code


# ── Commands ───────────────────────────────────────────────────────────


def cmd_build(args):
    """Build one target, or `all`."""
    config = load_config(args)
    plans = plans_for(config, args)

    config.summary()
    tasks = plans.all() if args.target == "all" else plans.target(args.target)
    return finish(run_tasks(tasks), args.target)


def cmd_zip(args):
    """Build everything and package it with the code archive."""
    config = load_config(args)
    plans = plans_for(config, args)

    config.summary()
    return finish(run_tasks(plans.zip()), config.zip_output)


def cmd_show(args):
    """Print the composed pandoc command for a target without running it."""
    config = load_config(args)
    builder = BUILDERS[args.target](config, verbose=args.verbose)
    print(command_line(builder.command()))
    return 0


def cmd_watch(args):
    """Initial build, preview server, then rebuild on change until Ctrl-C."""
    config = load_config(args)
    plans = plans_for(config, args)

    config.summary()
    outcome = run_tasks(plans.all())
    if not outcome.ok:
        print(f"  ✗ Initial build failed (exit {outcome.code}); watching anyway")

    groups = [
        WatchGroup(group.name, group.patterns, plans.named(group.tasks))
        for group in config.watch
    ]
    port = args.port if args.port is not None else config.port
    dist = config.path(config.dist_dir)
    os.makedirs(dist, exist_ok=True)
    server = serve(dist, port, verbose=args.verbose)
    try:
        Watcher(config.root, groups, interval=args.interval).run()
    except KeyboardInterrupt:
        print("\n  Stopped watching.")
    finally:
        server.shutdown()
        server.server_close()
    return 0


# ── Argument Parser ────────────────────────────────────────────────────


def build_parser():
    parser = argparse.ArgumentParser(
        prog="bookpipe",
        description="Book build pipeline (pandoc)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
examples:
  %(prog)s build pdf             Build the PDF
  %(prog)s build all --minify    Build every format with minified assets
  %(prog)s watch --port 4000     Rebuild on change, preview on :4000
  %(prog)s zip                   Build all and package for distribution
  %(prog)s show html             Print the pandoc command for html
        """,
    )

    sub = parser.add_subparsers(dest="command")

    # ── build ──────────────────────────────────────────────
    build_p = sub.add_parser("build", help="Build an output target")
    build_p.add_argument("target", choices=BUILD_CHOICES)
    _add_common_args(build_p)

    # ── watch ──────────────────────────────────────────────
    watch_p = sub.add_parser("watch", help="Build, serve, and rebuild on change")
    watch_p.add_argument("--port", type=int, help="Preview server port")
    watch_p.add_argument(
        "--interval", type=float, default=DEFAULT_INTERVAL, help="Poll interval (s)"
    )
    _add_common_args(watch_p)

    # ── zip ────────────────────────────────────────────────
    zip_p = sub.add_parser("zip", help="Build all and package the artifacts")
    _add_common_args(zip_p)

    # ── show ───────────────────────────────────────────────
    show_p = sub.add_parser("show", help="Print the pandoc command for a target")
    show_p.add_argument("target", choices=TARGET_NAMES)
    _add_common_args(show_p)

    return parser


def _add_common_args(parser):
    parser.add_argument("--config", help="Path to build.yaml")
    parser.add_argument(
        "--minify", action="store_true", help="Compress CSS and minify the JS bundle"
    )
    parser.add_argument("--verbose", "-v", action="store_true")


# ── Main ───────────────────────────────────────────────────────────────


def main(argv=None):
    parser = build_parser()
    argv = list(sys.argv[1:] if argv is None else argv)

    # Allow bare "bookpipe pdf" without the "build" subcommand.
    known_commands = {"build", "watch", "zip", "show"}
    if argv and argv[0] not in known_commands and not argv[0].startswith("-"):
        argv = ["build"] + argv
    args = parser.parse_args(argv)

    dispatch = {
        "build": cmd_build,
        "watch": cmd_watch,
        "zip": cmd_zip,
        "show": cmd_show,
    }

    handler = dispatch.get(args.command)
    if not handler:
        parser.print_help()
        return CONFIG_ERROR_EXIT

    try:
        return handler(args)
    except ConfigError as e:
        print(f"Error: {e}")
        return CONFIG_ERROR_EXIT
