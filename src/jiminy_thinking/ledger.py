# ledger.py
# The step ledger: the only stateful component.
#
# History is append-only. Branch buckets replicate steps into a secondary
# index; they never move or remove anything. One ledger per serving context,
# owned by the dispatcher.

from jiminy_thinking.judgment import JudgmentPolicy
from jiminy_thinking.models import Step, Snapshot


class StepLedger:
    """
    Ordered step history plus a branch index keyed by branch id.

    `append` is total over canonical steps (validator output) and always
    returns a Snapshot. With a judgment policy attached, every append
    recomputes the judgment over the full history.

    Example:
        ledger = StepLedger()
        snap = ledger.append(validate_step(payload, CategorySet.phases()))
        snap.history_length  # 1
    """

    def __init__(self, judgment_policy: JudgmentPolicy | None = None) -> None:
        self._history: list[Step] = []
        self._branches: dict[str, list[Step]] = {}
        self._judgment_policy = judgment_policy

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def append(self, step: Step) -> Snapshot:
        # Local correction only; earlier steps keep their own estimates.
        if step.index > step.estimated_total:
            step = step.model_copy(update={"estimated_total": step.index})

        self._history.append(step)

        # A reused branch id lands in the same bucket, whatever it branched from.
        if step.in_branch:
            self._branches.setdefault(step.branch_id, []).append(step)

        return self.snapshot()

    # ------------------------------------------------------------------
    # Read-only projections
    # ------------------------------------------------------------------

    def snapshot(self) -> Snapshot | None:
        """Status of the latest step against current state. None when empty."""
        if not self._history:
            return None

        latest = self._history[-1]
        judgment = None
        if self._judgment_policy is not None:
            judgment = self._judgment_policy.judge(self._history)

        return Snapshot(
            index=latest.index,
            estimated_total=latest.estimated_total,
            continuation=latest.continuation,
            category=latest.category,
            branch_ids=list(self._branches),
            history_length=len(self._history),
            judgment=judgment,
        )

    @property
    def latest(self) -> Step | None:
        return self._history[-1] if self._history else None

    @property
    def history(self) -> list[Step]:
        """Shallow copy of accepted steps in acceptance order."""
        return list(self._history)

    @property
    def branches(self) -> dict[str, list[Step]]:
        """Shallow copy of the branch index, in branch creation order."""
        return {branch_id: list(steps) for branch_id, steps in self._branches.items()}

    def branch(self, branch_id: str) -> list[Step]:
        return list(self._branches.get(branch_id, []))

    def __len__(self) -> int:
        return len(self._history)
