from __future__ import annotations

import threading
import time
from typing import Callable, Optional

import pytest

from ecg_risk.config import Settings
from ecg_risk.errors import NarrativeRequestError
from ecg_risk.models import (
    MALFORMED_MESSAGE,
    Batch,
    MalformedAssessment,
    RequestFailedAssessment,
    UserProfile,
    ValidAssessment,
)
from ecg_risk.pipeline import RunContext, run_batch
from ecg_risk.session import BatchSession

HIGH_ROW = ",".join(["0.5"] * 20)
LOW_ROW = ",".join(["0.1"] * 20)
SHORT_ROW = "0.1,0.2,0.3,0.4,0.5"


class _MemFile:
    def __init__(self, name: str, text: str):
        self.name = name
        self._text = text

    def read_text(self) -> str:
        return self._text


class _UnreadableFile:
    name = "gone.csv"

    def read_text(self) -> str:
        raise FileNotFoundError("gone.csv")


class _FakeClient:
    """Substitutable inference collaborator with call counting and hooks."""

    def __init__(self, reply: str = "- advice", *, delays: Optional[list[float]] = None, on_call: Optional[Callable[[int, str], None]] = None):
        self.reply = reply
        self.delays = delays or []
        self.on_call = on_call
        self.prompts: list[str] = []

    def complete(self, prompt: str) -> Optional[str]:
        n = len(self.prompts)
        self.prompts.append(prompt)
        if self.on_call is not None:
            self.on_call(n, prompt)
        if n < len(self.delays):
            time.sleep(self.delays[n])
        return f"{self.reply} #{n}"

    @property
    def calls(self) -> int:
        return len(self.prompts)


def _ctx(profile: Optional[UserProfile] = None, **settings) -> RunContext:
    return RunContext.create(profile=profile or UserProfile(age="50"), settings=Settings(**settings))


def test_malformed_files_never_call_the_client() -> None:
    client = _FakeClient()
    batch = run_batch([_MemFile("bad1.csv", SHORT_ROW), _MemFile("bad2.csv", "")], _ctx(), client=client)

    assert client.calls == 0
    assert [a.status for a in batch.assessments] == ["malformed", "malformed"]
    for a in batch.assessments:
        assert isinstance(a, MalformedAssessment)
        assert a.message == MALFORMED_MESSAGE
        assert not hasattr(a, "risk_score")
        assert not hasattr(a, "narrative")


def test_valid_files_are_scored_and_narrated_once_each() -> None:
    client = _FakeClient()
    batch = run_batch([_MemFile("high.csv", HIGH_ROW), _MemFile("low.csv", LOW_ROW)], _ctx(), client=client)

    assert client.calls == 2
    high, low = batch.assessments
    assert isinstance(high, ValidAssessment) and high.risk_score == 0.78
    assert isinstance(low, ValidAssessment) and low.risk_score == 0.12
    assert high.narrative == "- advice #0"
    assert len(high.values) == 20


def test_order_matches_selection_despite_varied_latency() -> None:
    names = ["a.csv", "b.csv", "c.csv", "d.csv"]
    client = _FakeClient(delays=[0.08, 0.0, 0.04, 0.01])
    batch = run_batch([_MemFile(n, HIGH_ROW) for n in names], _ctx(), client=client)

    assert [a.filename for a in batch.assessments] == names
    assert [a.narrative for a in batch.assessments] == [f"- advice #{i}" for i in range(4)]


def test_only_first_four_files_are_processed() -> None:
    files = [_MemFile(f"f{i}.csv", LOW_ROW) for i in range(6)]
    client = _FakeClient()
    batch = run_batch(files, _ctx(), client=client)

    assert [a.filename for a in batch.assessments] == ["f0.csv", "f1.csv", "f2.csv", "f3.csv"]
    assert client.calls == 4


def test_request_failure_is_captured_and_batch_continues() -> None:
    def _fail_second(n: int, prompt: str) -> None:
        if n == 1:
            raise NarrativeRequestError("APIConnectionError: Connection error.")

    client = _FakeClient(on_call=_fail_second)
    files = [_MemFile("one.csv", LOW_ROW), _MemFile("two.csv", HIGH_ROW), _MemFile("three.csv", LOW_ROW)]
    batch = run_batch(files, _ctx(), client=client)

    assert [a.status for a in batch.assessments] == ["valid", "request_failed", "valid"]
    failed = batch.assessments[1]
    assert isinstance(failed, RequestFailedAssessment)
    assert failed.risk_score == 0.78
    assert "Connection error" in failed.error
    assert client.calls == 3


def test_unreadable_file_becomes_malformed() -> None:
    client = _FakeClient()
    batch = run_batch([_UnreadableFile(), _MemFile("ok.csv", LOW_ROW)], _ctx(), client=client)
    assert [a.status for a in batch.assessments] == ["malformed", "valid"]
    assert client.calls == 1


def test_busy_for_the_whole_batch_and_previous_batch_discarded() -> None:
    session = BatchSession()
    run_batch([_MemFile("old.csv", LOW_ROW)], _ctx(), client=_FakeClient(), session=session)
    assert session.batch.assessments[0].filename == "old.csv"

    observed: list[tuple[bool, bool]] = []
    client = _FakeClient(on_call=lambda n, p: observed.append((session.busy, session.batch.is_empty)))
    run_batch([_MemFile("a.csv", LOW_ROW), _MemFile("b.csv", LOW_ROW)], _ctx(), client=client, session=session)

    assert observed == [(True, True), (True, True)]
    assert session.busy is False
    assert [a.filename for a in session.batch.assessments] == ["a.csv", "b.csv"]


def test_profile_edits_during_run_do_not_leak_into_later_prompts() -> None:
    profile = UserProfile(name="Alice", age="61")

    def _edit(n: int, prompt: str) -> None:
        profile.name = "Mallory"

    client = _FakeClient(on_call=_edit)
    run_batch([_MemFile("a.csv", LOW_ROW), _MemFile("b.csv", LOW_ROW)], _ctx(profile), client=client)

    assert all("Name: Alice" in p for p in client.prompts)
    assert profile.name == "Mallory"


def test_committed_listener_fires_once_per_run() -> None:
    session = BatchSession()
    seen: list[Batch] = []
    unsubscribe = session.subscribe(seen.append)

    batch = run_batch([_MemFile("a.csv", HIGH_ROW)], _ctx(), client=_FakeClient(), session=session)
    assert seen == [batch]
    assert session.batch == batch

    unsubscribe()
    run_batch([_MemFile("b.csv", HIGH_ROW)], _ctx(), client=_FakeClient(), session=session)
    assert len(seen) == 1


def test_superseded_run_results_are_discarded() -> None:
    session = BatchSession()
    seen: list[int] = []
    session.subscribe(lambda b: seen.append(b.run_id))

    started = threading.Event()
    release = threading.Event()

    def _block(n: int, prompt: str) -> None:
        started.set()
        assert release.wait(timeout=5)

    slow_client = _FakeClient(on_call=_block)
    result: dict[str, Batch] = {}

    def _slow_run() -> None:
        result["old"] = run_batch([_MemFile("old.csv", HIGH_ROW)], _ctx(), client=slow_client, session=session)

    t = threading.Thread(target=_slow_run)
    t.start()
    assert started.wait(timeout=5)

    new_batch = run_batch([_MemFile("new.csv", LOW_ROW)], _ctx(), client=_FakeClient(), session=session)
    release.set()
    t.join(timeout=5)

    old_batch = result["old"]
    assert old_batch.run_id < new_batch.run_id
    assert session.current_run_id == new_batch.run_id
    assert [a.filename for a in session.batch.assessments] == ["new.csv"]
    assert session.busy is False
    assert seen == [new_batch.run_id]


def test_session_commit_rejects_stale_run_ids() -> None:
    session = BatchSession()
    first = session.begin_run()
    second = session.begin_run()
    assert second > first

    assert session.commit(first, []) is False
    assert session.busy is True
    assert session.commit(second, []) is True
    assert session.busy is False


def test_unexpected_error_clears_busy_and_propagates() -> None:
    session = BatchSession()

    def _boom(n: int, prompt: str) -> None:
        raise RuntimeError("bug in client")

    with pytest.raises(RuntimeError):
        run_batch([_MemFile("a.csv", HIGH_ROW)], _ctx(), client=_FakeClient(on_call=_boom), session=session)
    assert session.busy is False


def test_huge_finite_values_are_scored_without_aborting_the_batch() -> None:
    session = BatchSession()
    client = _FakeClient()
    files = [_MemFile("big.csv", ",".join(["1e308"] * 20)), _MemFile("ok.csv", LOW_ROW)]
    batch = run_batch(files, _ctx(), client=client, session=session)

    assert [a.status for a in batch.assessments] == ["valid", "valid"]
    assert batch.assessments[0].risk_score == 0.78
    assert batch.assessments[1].risk_score == 0.12
    assert session.batch == batch
    assert session.busy is False


def test_failing_listener_does_not_block_others_or_the_result(caplog) -> None:
    session = BatchSession()
    seen: list[int] = []

    def _broken(batch: Batch) -> None:
        raise RuntimeError("chart backend unavailable")

    session.subscribe(_broken)
    session.subscribe(lambda b: seen.append(b.run_id))

    with caplog.at_level("ERROR", logger="ecg_risk.session"):
        batch = run_batch([_MemFile("a.csv", HIGH_ROW)], _ctx(), client=_FakeClient(), session=session)

    assert seen == [batch.run_id]
    assert session.batch == batch
    assert session.busy is False
    assert "chart backend unavailable" in caplog.text
