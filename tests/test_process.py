import io
import os
import sys

import pytest

from bookpipe.process import (
    ConsoleSink,
    Failure,
    MemorySink,
    OutputSink,
    Success,
    outcome_for,
    run_command,
)


def python(code):
    return [sys.executable, "-c", code]


@pytest.mark.parametrize("code", [0, 1, 2, 7, 255])
def test_exit_code_propagation(code):
    outcome = run_command(python(f"import sys; sys.exit({code})"), MemorySink())
    if code == 0:
        assert outcome == Success()
        assert outcome.ok
    else:
        assert outcome == Failure(code)
        assert outcome.code == code
        assert not outcome.ok


def test_failure_relays_stderr():
    sink = MemorySink()
    outcome = run_command(
        python("import sys; sys.stderr.write('template not found'); sys.exit(1)"),
        sink,
    )
    assert outcome == Failure(1)
    assert "template not found" in sink.stderr


def test_stdout_order_preserved():
    sink = MemorySink()
    run_command(
        python("import sys\nfor i in range(200):\n    print(i); sys.stdout.flush()"),
        sink,
    )
    assert sink.stdout.split() == [str(i) for i in range(200)]
    assert sink.stderr == ""


def test_both_streams_relayed():
    sink = MemorySink()
    run_command(
        python("import sys; print('out'); sys.stderr.write('err\\n')"),
        sink,
    )
    assert sink.stdout.strip() == "out"
    assert sink.stderr.strip() == "err"


def test_cwd(tmp_path):
    sink = MemorySink()
    run_command(python("import os; print(os.getcwd())"), sink, cwd=str(tmp_path))
    assert os.path.realpath(sink.stdout.strip()) == os.path.realpath(str(tmp_path))


def test_missing_executable_raises():
    with pytest.raises(FileNotFoundError):
        run_command(["definitely-not-a-real-tool-xyz"], MemorySink())


def test_outcome_for():
    assert outcome_for(0) == Success()
    assert outcome_for(3) == Failure(3)
    assert Success() != Failure(0)


class _Stream(io.StringIO):
    def __init__(self):
        super().__init__()
        self.buffer = io.BytesIO()


def test_console_sink_writes_bytes_through():
    out, err = _Stream(), _Stream()
    sink = ConsoleSink(stdout=out, stderr=err)
    sink.write_out(b"hello ")
    sink.write_out(b"world")
    sink.write_err(b"template not found")
    assert out.buffer.getvalue() == b"hello world"
    assert err.buffer.getvalue() == b"template not found"


def test_console_sink_text_stream_fallback():
    out = io.StringIO()
    ConsoleSink(stdout=out, stderr=out).write_out("café".encode("utf-8"))
    assert out.getvalue() == "café"


def test_output_sink_is_abstract():
    class OutOnly(OutputSink):
        def write_out(self, data):
            pass

    with pytest.raises(TypeError):
        OutputSink()
    with pytest.raises(TypeError):
        OutOnly()
