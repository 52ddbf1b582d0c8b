# dispatcher.py
# Request dispatcher for the Jiminy step ledger.
#
# The dispatcher owns the request path. The validator and ledger are pure
# collaborators; neither knows about the host or the terminal.
#
# Control flow:
#   payload → validate_step → ledger.append → render (optional)
#   → JSON snapshot | JSON failure
#
# All terminal output is delegated to display.py — no formatting here.

import json
from typing import Any

from jiminy_thinking import display
from jiminy_thinking.categories import CategorySet
from jiminy_thinking.ledger import StepLedger
from jiminy_thinking.models import FailureResult, ToolResponse
from jiminy_thinking.tool import TOOL_NAME
from jiminy_thinking.validator import StepValidationError, validate_step


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _to_json(data: dict[str, Any]) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


# ---------------------------------------------------------------------------
# StepDispatcher
# ---------------------------------------------------------------------------


class StepDispatcher:
    """
    Single entry point the host calls with an untyped payload.

    Never raises for bad input: validation failures come back as a
    `{"error": ..., "status": "failed"}` body with `is_error=True`, and the
    ledger is left untouched.

    Example:
        dispatcher = StepDispatcher(StepLedger(), CategorySet.phases())
        response = dispatcher.process_step({"text": "A", "index": 1, ...})
    """

    def __init__(
        self,
        ledger: StepLedger,
        categories: CategorySet,
        log_steps: bool = True,
    ) -> None:
        self._ledger = ledger
        self._categories = categories
        self._log_steps = log_steps

    @property
    def ledger(self) -> StepLedger:
        return self._ledger

    @property
    def categories(self) -> CategorySet:
        return self._categories

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def process_step(self, payload: Any) -> ToolResponse:
        try:
            step = validate_step(payload, self._categories)
        except StepValidationError as exc:
            failure = FailureResult(error=str(exc))
            return ToolResponse(text=_to_json(failure.model_dump()), is_error=True)

        snapshot = self._ledger.append(step)

        if self._log_steps:
            # Render the stored step so the corrected estimate is shown.
            display.render_step(self._ledger.latest, self._categories)

        body = snapshot.model_dump(mode="json", by_alias=True, exclude_none=True)
        return ToolResponse(text=_to_json(body))

    def call_tool(self, name: str, arguments: Any) -> ToolResponse:
        """Route a host tool call by name."""
        if name != TOOL_NAME:
            return ToolResponse(text=f"Unknown tool: {name}", is_error=True)
        return self.process_step(arguments)
