# models.py
# Data contracts for the Jiminy step ledger.
# No business logic lives here — pure schema.
#
# Wire names are camelCase (aliases); attributes are snake_case.

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class Judgment(str, Enum):
    """Aggregate label computed over qualifying steps. Absent = undetermined."""

    UNIFORMLY_AFFIRMATIVE = "uniformly_affirmative"
    DISSENT = "dissent"
    MIXED = "mixed"


class Step(BaseModel):
    """A single recorded unit of the caller's reasoning sequence."""

    model_config = ConfigDict(populate_by_name=True)

    text: str = Field(..., description="Content of the step.")
    index: int | float = Field(..., description="Caller-declared position in the sequence.")
    estimated_total: int | float = Field(..., alias="estimatedTotal")
    continuation: bool = Field(..., description="Whether further steps will follow.")
    category: int | str = Field(..., description="Phase or framework tag.")

    is_revision: bool | None = Field(default=None, alias="isRevision")
    revises_index: int | None = Field(default=None, alias="revisesIndex")
    branch_from_index: int | None = Field(default=None, alias="branchFromIndex")
    branch_id: str | None = Field(default=None, alias="branchId")
    needs_more: bool | None = Field(default=None, alias="needsMore")
    followup_hint: str | None = Field(default=None, alias="followupHint")

    @property
    def in_branch(self) -> bool:
        return self.branch_from_index is not None and self.branch_id is not None


class Snapshot(BaseModel):
    """Accumulated status returned after each accepted step."""

    model_config = ConfigDict(populate_by_name=True)

    index: int | float
    estimated_total: int | float = Field(..., alias="estimatedTotal")
    continuation: bool
    category: int | str
    branch_ids: list[str] = Field(default_factory=list, alias="branches")
    history_length: int = Field(..., alias="historyLength")
    judgment: Judgment | None = None


class FailureResult(BaseModel):
    """Structured rejection returned to the caller instead of raising."""

    error: str
    status: Literal["failed"] = "failed"


class ToolResponse(BaseModel):
    """Text payload handed back to the host, plus its error flag."""

    text: str
    is_error: bool = False
