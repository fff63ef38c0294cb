import threading
import time

import pytest

from lead_importer.engines.sample import SyntaxVerificationEngine
from lead_importer.orchestrator.store import InMemoryLeadStore, NewLead
from lead_importer.orchestrator.verification import EmailVerificationService


class RecordingEngine:
    def __init__(self, failing=()):
        self.calls = []
        self._failing = set(failing)
        self._lock = threading.Lock()

    def verify(self, email: str) -> bool:
        with self._lock:
            self.calls.append(email)
        if email in self._failing:
            raise TimeoutError("workflow timed out")
        return email.endswith("@example.com")


class SlowEngine:
    def verify(self, email: str) -> bool:
        time.sleep(0.05 if email.startswith("slow") else 0.0)
        return True


@pytest.fixture()
def store():
    return InMemoryLeadStore(
        [
            NewLead(first_name="Ada", last_name="Lovelace", email="ada@example.com"),
            NewLead(first_name="Grace", last_name="Hopper", email="grace@navy.mil"),
            NewLead(first_name="Alan", last_name="Turing", email="alan@example.com"),
        ]
    )


def test_verify_leads_updates_store(store):
    engine = RecordingEngine()

    batch = EmailVerificationService(engine, store).verify_leads([1, 2])

    assert batch.verified_count == 2
    assert [(item.lead_id, item.email_verified) for item in batch.results] == [(1, True), (2, False)]
    assert store.get_many([1])[0].email_verified is True
    assert store.get_many([2])[0].email_verified is False
    assert store.get_many([3])[0].email_verified is None


def test_failures_do_not_abort_the_batch(store):
    engine = RecordingEngine(failing={"grace@navy.mil"})

    batch = EmailVerificationService(engine, store).verify_leads([1, 2, 3])

    assert batch.verified_count == 2
    assert len(batch.errors) == 1
    failure = batch.errors[0]
    assert (failure.lead_id, failure.lead_name, failure.error) == (2, "Grace Hopper", "workflow timed out")
    assert engine.calls == ["ada@example.com", "grace@navy.mil", "alan@example.com"]


def test_unknown_ids_are_ignored(store):
    batch = EmailVerificationService(RecordingEngine(), store).verify_leads([3, 99])

    assert [item.lead_id for item in batch.results] == [3]


def test_no_matching_leads(store):
    with pytest.raises(LookupError, match="No leads found"):
        EmailVerificationService(RecordingEngine(), store).verify_leads([42])


def test_empty_id_list(store):
    with pytest.raises(ValueError):
        EmailVerificationService(RecordingEngine(), store).verify_leads([])


def test_concurrent_mode_preserves_lead_order():
    store = InMemoryLeadStore(
        [
            NewLead(first_name="Slow", last_name="One", email="slow@example.com"),
            NewLead(first_name="Fast", last_name="Two", email="fast@example.com"),
        ]
    )

    batch = EmailVerificationService(SlowEngine(), store, concurrent=True, max_workers=2).verify_leads([1, 2])

    assert [item.lead_id for item in batch.results] == [1, 2]


def test_syntax_engine():
    engine = SyntaxVerificationEngine(blocked_domains=["Mailinator.com"])

    assert engine.verify("ada@example.com")
    assert not engine.verify("ada@mailinator.com")
    assert not engine.verify("not-an-email")
