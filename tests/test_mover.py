import io
import os
import pytest
from photos_rename.exceptions import ConfirmationDeclined
from photos_rename.models import RenamePair
from photos_rename.organization.mover import ExecutionMode, PlanExecutor, ask_confirmation
from photos_rename.reporting import PlanReporter


def make_executor(answers=None, stream=None):
    """Executor with a scripted confirmation; records every prompt."""
    prompts = []

    def confirm(count):
        prompts.append(count)
        if answers is None:
            raise AssertionError("confirmation must not be requested")
        return answers.pop(0)

    executor = PlanExecutor(PlanReporter(stream or io.StringIO()), confirm=confirm, show_progress=False)
    return executor, prompts


@pytest.fixture
def simple_plan(photo_dir, make_files):
    make_files(photo_dir, "a.jpg", "a.RW2", "keep.jpg")
    return [
        RenamePair(photo_dir / "a.jpg", photo_dir / "2023_0803_150850.jpg"),
        RenamePair(photo_dir / "a.RW2", photo_dir / "2023_0803_150850.RW2"),
        RenamePair(photo_dir / "keep.jpg", photo_dir / "keep.jpg"),
    ]


def test_renames_after_confirmation(photo_dir, simple_plan):
    executor, prompts = make_executor(answers=[True])

    result = executor.execute(simple_plan, ExecutionMode())

    assert prompts == [2]
    assert result.renamed == 2
    assert result.failed == 0
    assert result.no_op == 1
    assert sorted(p.name for p in photo_dir.iterdir()) == [
        "2023_0803_150850.RW2", "2023_0803_150850.jpg", "keep.jpg",
    ]
    assert (photo_dir / "2023_0803_150850.jpg").read_bytes() == b"data:a.jpg"


def test_declined_confirmation_touches_nothing(photo_dir, simple_plan, listing):
    before = listing(photo_dir)
    executor, prompts = make_executor(answers=[False])

    with pytest.raises(ConfirmationDeclined) as exc:
        executor.execute(simple_plan, ExecutionMode())

    assert exc.value.exit_code == 100
    assert prompts == [2]
    assert listing(photo_dir) == before


def test_dry_run_never_renames(photo_dir, simple_plan, listing):
    before = listing(photo_dir)
    executor, prompts = make_executor()

    result = executor.execute(simple_plan, ExecutionMode(dry_run=True))

    assert result.dry_run
    assert result.planned == 2
    assert result.renamed == 0
    assert prompts == []
    assert listing(photo_dir) == before


def test_dry_run_ignores_skip_confirmation(photo_dir, simple_plan, listing):
    before = listing(photo_dir)
    executor, _ = make_executor()
    executor.execute(simple_plan, ExecutionMode(dry_run=True, skip_confirmation=True))
    assert listing(photo_dir) == before


def test_skip_confirmation(photo_dir, simple_plan):
    executor, prompts = make_executor()
    result = executor.execute(simple_plan, ExecutionMode(skip_confirmation=True))
    assert prompts == []
    assert result.renamed == 2


def test_nothing_to_rename_does_not_prompt(photo_dir, make_files):
    make_files(photo_dir, "x.jpg")
    plan = [RenamePair(photo_dir / "x.jpg", photo_dir / "x.jpg")]
    executor, prompts = make_executor()

    result = executor.execute(plan, ExecutionMode())

    assert prompts == []
    assert result.planned == 0
    assert result.no_op == 1


def test_failure_does_not_stop_the_run(photo_dir, make_files, caplog):
    make_files(photo_dir, "a.jpg", "b.jpg", "taken.jpg")
    plan = [
        RenamePair(photo_dir / "gone.jpg", photo_dir / "x.jpg"),
        RenamePair(photo_dir / "a.jpg", photo_dir / "taken.jpg"),
        RenamePair(photo_dir / "b.jpg", photo_dir / "y.jpg"),
    ]
    executor, _ = make_executor()

    result = executor.execute(plan, ExecutionMode(skip_confirmation=True))

    assert result.renamed == 1
    assert result.failed == 2
    assert (photo_dir / "y.jpg").exists()
    # Never overwritten
    assert (photo_dir / "taken.jpg").read_bytes() == b"data:taken.jpg"
    assert (photo_dir / "a.jpg").exists()
    assert "gone.jpg" in caplog.text
    assert "target already exists" in caplog.text


def test_case_only_rename(photo_dir, make_files):
    make_files(photo_dir, "P.JPG")
    plan = [RenamePair(photo_dir / "P.JPG", photo_dir / "P.jpg")]
    executor, _ = make_executor()

    result = executor.execute(plan, ExecutionMode(skip_confirmation=True))

    assert result.renamed == 1
    assert [p.name for p in photo_dir.iterdir()] == ["P.jpg"]


def test_report_lists_renames_only(photo_dir, simple_plan):
    out = io.StringIO()
    executor, _ = make_executor(stream=out)

    executor.execute(simple_plan, ExecutionMode(dry_run=True))

    text = out.getvalue()
    assert f"{photo_dir / 'a.jpg'} -> 2023_0803_150850.jpg" in text
    assert "no-op" not in text
    assert "2 file(s) to rename." in text


def test_verbose_report_lists_no_ops(photo_dir, simple_plan):
    out = io.StringIO()
    executor, _ = make_executor(stream=out)

    executor.execute(simple_plan, ExecutionMode(dry_run=True, verbose=True))

    assert f"{photo_dir / 'keep.jpg'} (no-op)" in out.getvalue()


@pytest.mark.parametrize("answer, expected", [
    ("y", True), ("Y", True), (" y\n", True),
    ("yes", False), ("n", False), ("", False),
])
def test_ask_confirmation(monkeypatch, answer, expected):
    monkeypatch.setattr("builtins.input", lambda prompt: answer)
    assert ask_confirmation(3) is expected


def test_ask_confirmation_on_closed_stdin(monkeypatch):
    def closed_stdin(prompt):
        raise EOFError

    monkeypatch.setattr("builtins.input", closed_stdin)
    assert ask_confirmation(3) is False
