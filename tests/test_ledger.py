import pytest

from jiminy_thinking.categories import CategorySet
from jiminy_thinking.judgment import MarkerJudgmentPolicy
from jiminy_thinking.ledger import StepLedger
from jiminy_thinking.models import Judgment, Step
from jiminy_thinking.validator import validate_step

FREE = CategorySet.free_text()


def _step(text="A", index=1, total=1, category="detection", **extra) -> Step:
    payload = {
        "text": text,
        "index": index,
        "estimatedTotal": total,
        "continuation": True,
        "category": category,
    }
    payload.update(extra)
    return validate_step(payload, FREE)


# ---------------------------------------------------------------------------
# Append-only history
# ---------------------------------------------------------------------------

def test_first_append_scenario():
    ledger = StepLedger()
    snap = ledger.append(_step("A", index=1, total=1))
    assert snap.history_length == 1
    assert snap.estimated_total == 1
    assert snap.category == "detection"
    assert snap.branch_ids == []
    assert snap.judgment is None

def test_history_length_tracks_accepted_steps():
    ledger = StepLedger()
    for n in range(1, 8):
        snap = ledger.append(_step(f"step {n}", index=n, total=7))
        assert snap.history_length == n
    assert len(ledger) == 7

def test_prior_entries_never_change():
    ledger = StepLedger()
    ledger.append(_step("first", index=1, total=2))
    ledger.append(_step("second", index=2, total=2))
    ledger.append(_step("revised first", index=3, total=3, isRevision=True, revisesIndex=1))

    history = ledger.history
    assert [s.text for s in history] == ["first", "second", "revised first"]
    assert [s.index for s in history] == [1, 2, 3]
    assert history[2].is_revision is True
    assert history[2].revises_index == 1

def test_history_keeps_acceptance_order_not_index_order():
    ledger = StepLedger()
    ledger.append(_step("late", index=5, total=5))
    ledger.append(_step("early", index=1, total=5))
    ledger.append(_step("dup", index=1, total=5))
    assert [s.index for s in ledger.history] == [5, 1, 1]

def test_history_property_is_a_copy():
    ledger = StepLedger()
    ledger.append(_step())
    ledger.history.clear()
    ledger.branches["x"] = []
    assert len(ledger) == 1
    assert ledger.branches == {}

# ---------------------------------------------------------------------------
# Estimate monotonicity
# ---------------------------------------------------------------------------

def test_estimate_corrected_when_index_exceeds_it():
    ledger = StepLedger()
    ledger.append(_step("A", index=1, total=1))
    snap = ledger.append(_step("B", index=5, total=2, category="analysis"))
    assert snap.estimated_total == 5
    assert ledger.latest.estimated_total == 5

def test_estimate_left_alone_otherwise():
    ledger = StepLedger()
    snap = ledger.append(_step(index=2, total=9))
    assert snap.estimated_total == 9

def test_correction_is_local_to_the_step():
    ledger = StepLedger()
    ledger.append(_step("A", index=1, total=1))
    ledger.append(_step("B", index=4, total=2))
    assert [s.estimated_total for s in ledger.history] == [1, 4]

def test_correction_does_not_mutate_caller_step():
    ledger = StepLedger()
    step = _step(index=6, total=2)
    ledger.append(step)
    assert step.estimated_total == 2

# ---------------------------------------------------------------------------
# Branch filing
# ---------------------------------------------------------------------------

def test_branch_scenario():
    ledger = StepLedger()
    ledger.append(_step("A", index=1, total=3))
    snap = ledger.append(_step("alt", index=2, total=3, branchFromIndex=2, branchId="alt"))
    assert snap.branch_ids == ["alt"]
    assert len(ledger.branch("alt")) == 1
    assert snap.history_length == 2

def test_branch_step_appears_once_in_bucket_and_in_history():
    ledger = StepLedger()
    step = _step("alt", index=2, total=3, branchFromIndex=1, branchId="alt")
    ledger.append(step)
    assert [s.text for s in ledger.branch("alt")] == ["alt"]
    assert [s.text for s in ledger.history] == ["alt"]

@pytest.mark.parametrize("extra", [{"branchFromIndex": 1}, {"branchId": "alt"}, {}])
def test_step_missing_either_branch_field_is_not_filed(extra):
    ledger = StepLedger()
    snap = ledger.append(_step(**extra))
    assert snap.branch_ids == []
    assert ledger.branches == {}

def test_reused_branch_id_merges_into_one_bucket():
    ledger = StepLedger()
    ledger.append(_step("x1", index=2, total=4, branchFromIndex=1, branchId="x"))
    ledger.append(_step("x2", index=3, total=4, branchFromIndex=2, branchId="x"))
    assert [s.text for s in ledger.branch("x")] == ["x1", "x2"]
    assert list(ledger.branches) == ["x"]

def test_branch_ids_in_creation_order():
    ledger = StepLedger()
    for branch_id in ("beta", "alpha", "beta", "gamma"):
        snap = ledger.append(_step(branchFromIndex=1, branchId=branch_id))
    assert snap.branch_ids == ["beta", "alpha", "gamma"]

def test_unknown_branch_is_empty():
    assert StepLedger().branch("nope") == []

# ---------------------------------------------------------------------------
# Snapshot projection
# ---------------------------------------------------------------------------

def test_snapshot_empty_ledger():
    ledger = StepLedger()
    assert ledger.snapshot() is None
    assert ledger.latest is None

def test_snapshot_reread_is_idempotent():
    ledger = StepLedger()
    ledger.append(_step(index=3, total=1, branchFromIndex=1, branchId="b"))
    assert ledger.snapshot() == ledger.snapshot()
    assert ledger.snapshot().model_dump() == ledger.snapshot().model_dump()

def test_snapshot_matches_append_result():
    ledger = StepLedger()
    snap = ledger.append(_step(index=2, total=4))
    assert ledger.snapshot() == snap

# ---------------------------------------------------------------------------
# Judgment (heuristic, not semantic)
# ---------------------------------------------------------------------------

def test_ledger_recomputes_judgment_each_append():
    frameworks = CategorySet.frameworks()
    ledger = StepLedger(judgment_policy=MarkerJudgmentPolicy(frameworks.substantive))

    def framework_step(text, tag, index):
        return validate_step(
            {
                "text": text,
                "index": index,
                "estimatedTotal": 3,
                "continuation": True,
                "category": tag,
            },
            frameworks,
        )

    assert ledger.append(framework_step("We endorse option B.", "deontological", 1)).judgment is None
    snap = ledger.append(framework_step("I endorse it too.", "care", 2))
    assert snap.judgment is Judgment.UNIFORMLY_AFFIRMATIVE
    snap = ledger.append(framework_step("Rights view: reject B.", "rights", 3))
    assert snap.judgment is Judgment.DISSENT

def test_no_policy_means_no_judgment():
    ledger = StepLedger()
    ledger.append(_step("endorse", index=1, total=2))
    snap = ledger.append(_step("endorse", index=2, total=2))
    assert snap.judgment is None
