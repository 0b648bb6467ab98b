"""
External process execution with live output relay.

A build task runs exactly one child process. Its stdout and stderr are
read on two threads and each chunk is handed to an OutputSink as soon as
it arrives; order is kept within a stream but not across the two. There
is no timeout and no cancellation: the call returns when the child exits.
"""

import subprocess
import sys
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass


CHUNK_SIZE = 4096

# Shell convention for "command not found"
NOT_FOUND_EXIT = 127

# Shell convention for "found but not executable"
NOT_EXECUTABLE_EXIT = 126


# ── Outcomes ───────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ExitOutcome:
    code: int = 0

    @property
    def ok(self):
        return self.code == 0


@dataclass(frozen=True)
class Success(ExitOutcome):
    pass


@dataclass(frozen=True)
class Failure(ExitOutcome):
    pass


def outcome_for(returncode):
    """Success for exit code 0, Failure(code) for anything else."""
    if returncode == 0:
        return Success()
    return Failure(returncode)


# ── Output sinks ───────────────────────────────────────────────────────


class OutputSink(ABC):
    """Receives raw child-process output. Subclasses pick the destination."""

    @abstractmethod
    def write_out(self, data):
        ...

    @abstractmethod
    def write_err(self, data):
        ...


class ConsoleSink(OutputSink):
    """Pass-through to the invoking console, flushed per chunk."""

    def __init__(self, stdout=None, stderr=None):
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr
        self._lock = threading.Lock()

    def _write(self, stream, data):
        with self._lock:
            buffer = getattr(stream, "buffer", None)
            if buffer is not None:
                buffer.write(data)
            else:
                stream.write(data.decode("utf-8", errors="replace"))
            stream.flush()

    def write_out(self, data):
        self._write(self.stdout, data)

    def write_err(self, data):
        self._write(self.stderr, data)


class MemorySink(OutputSink):
    """Collects chunks in memory."""

    def __init__(self):
        self.out = []
        self.err = []

    def write_out(self, data):
        self.out.append(data)

    def write_err(self, data):
        self.err.append(data)

    @property
    def stdout(self):
        return b"".join(self.out).decode("utf-8", errors="replace")

    @property
    def stderr(self):
        return b"".join(self.err).decode("utf-8", errors="replace")


# ── Execution ──────────────────────────────────────────────────────────


def _relay(stream, write):
    read = getattr(stream, "read1", stream.read)
    try:
        while True:
            chunk = read(CHUNK_SIZE)
            if not chunk:
                break
            write(chunk)
    finally:
        stream.close()


def run_command(cmd, sink, cwd=None):
    """
    Run `cmd` (an argv list), relaying its output to `sink`.

    Returns Success if the child exits 0, Failure(code) otherwise.
    Raises FileNotFoundError if the executable does not exist.
    """
    proc = subprocess.Popen(
        cmd,
        cwd=cwd,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
    )

    readers = [
        threading.Thread(target=_relay, args=(proc.stdout, sink.write_out), daemon=True),
        threading.Thread(target=_relay, args=(proc.stderr, sink.write_err), daemon=True),
    ]
    for reader in readers:
        reader.start()

    returncode = proc.wait()
    for reader in readers:
        reader.join()

    return outcome_for(returncode)
