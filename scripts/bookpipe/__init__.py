"""
bookpipe — build orchestration for a pandoc-compiled book.

Public API:
    from bookpipe.config import BuildConfig, ConfigError
    from bookpipe.command import compose_command, command_line
    from bookpipe.process import run_command, ConsoleSink, Success, Failure
    from bookpipe.tasks import Plans, run_tasks
    from bookpipe.watch import Watcher
    from bookpipe.serve import serve
"""
