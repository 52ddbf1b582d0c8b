# judgment.py
# Pluggable aggregate-judgment policies for the step ledger.
#
# MarkerJudgmentPolicy is a lexical placeholder: case-insensitive substring
# matching on marker tokens, no negation handling, no semantics. It only
# produces a machine-readable summary flag. Swap the policy rather than
# hardening it; the ledger does not depend on its accuracy.

from collections.abc import Iterable, Sequence
from typing import Protocol

from jiminy_thinking.models import Judgment, Step


class JudgmentPolicy(Protocol):
    def judge(self, history: Sequence[Step]) -> Judgment | None: ...


class MarkerJudgmentPolicy:
    """
    Judge qualifying steps by marker tokens in their text.

    Fewer than two qualifying steps   -> None (undetermined)
    All contain the affirmative token -> UNIFORMLY_AFFIRMATIVE
    Any contains the negative token   -> DISSENT
    Otherwise                         -> MIXED
    """

    def __init__(
        self,
        qualifying: Iterable[str],
        affirmative: str = "endorse",
        negative: str = "reject",
    ) -> None:
        self._qualifying = frozenset(qualifying)
        self._affirmative = affirmative.lower()
        self._negative = negative.lower()

    def judge(self, history: Sequence[Step]) -> Judgment | None:
        texts = [step.text.lower() for step in history if step.category in self._qualifying]
        if len(texts) < 2:
            return None
        if all(self._affirmative in text for text in texts):
            return Judgment.UNIFORMLY_AFFIRMATIVE
        if any(self._negative in text for text in texts):
            return Judgment.DISSENT
        return Judgment.MIXED
