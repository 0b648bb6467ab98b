import pytest

from bookpipe.config import ConfigError
from bookpipe.process import Failure, MemorySink, Success
from bookpipe.tasks import Plans, Task, run_tasks


def recording_task(name, log, outcome=Success()):
    def run():
        log.append(name)
        return outcome
    return Task(name, run)


def test_runs_in_order():
    log = []
    outcome = run_tasks([recording_task(n, log) for n in ("css", "js", "pdf")])
    assert outcome == Success()
    assert log == ["css", "js", "pdf"]


def test_stops_at_first_failure():
    log = []
    tasks = [
        recording_task("css", log),
        recording_task("pdf", log, Failure(43)),
        recording_task("html", log),
    ]
    assert run_tasks(tasks) == Failure(43)
    assert log == ["css", "pdf"]


def test_checks_run_before_anything_launches():
    log = []

    def bad_check():
        raise ConfigError("missing template")

    tasks = [recording_task("css", log), Task("pdf", lambda: Success(), bad_check)]
    with pytest.raises(ConfigError, match="missing template"):
        run_tasks(tasks)
    assert log == []


def test_empty_list_succeeds():
    assert run_tasks([]) == Success()


@pytest.mark.parametrize(
    "plan,names",
    [
        (lambda p: p.target("pdf"), ["pdf"]),
        (lambda p: p.target("json"), ["json"]),
        (lambda p: p.target("html"), ["css", "js", "html"]),
        (lambda p: p.all(), ["css", "js", "pdf", "html", "epub"]),
        (lambda p: p.zip(), ["css", "js", "pdf", "html", "epub", "fetch", "zip"]),
        (lambda p: p.named(["css", "html"]), ["css", "html"]),
    ],
)
def test_plans(config, plan, names):
    tasks = plan(Plans(config, sink=MemorySink()))
    assert [task.name for task in tasks] == names


def test_unknown_target(config):
    with pytest.raises(ConfigError, match="Unknown target 'docx'"):
        Plans(config).target("docx")


def test_all_aborts_on_failing_subtask(config, runner):
    runner.outcomes = [Success(), Success(), Failure(1)]
    outcome = run_tasks(Plans(config, sink=MemorySink()).all())

    assert outcome == Failure(1)
    assert runner.tools == ["lessc", "browserify", "pandoc"]


def test_zip_runs_everything(config, runner):
    assert run_tasks(Plans(config, sink=MemorySink()).zip()) == Success()
    assert runner.tools == [
        "lessc", "browserify", "pandoc", "pandoc", "pandoc", "curl", "zip",
    ]
