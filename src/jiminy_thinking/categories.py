# categories.py
# Closed category sets accepted by the validator.
#
# A deployment picks exactly one mode at startup. The set is injected into
# the validator, the renderer and the tool schema; nothing here is global
# mutable state.

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class CategoryMode(str, Enum):
    PHASE = "phase"
    FRAMEWORK = "framework"
    FREE_TEXT = "free"


PHASE_LABELS: dict[int, str] = {
    0: "Ethical Issue Detection",
    1: "Multi-Perspective Analysis",
    2: "Solutions & Moral Imagination",
}

PHASE_STYLES: dict[int, str] = {
    0: "bright_black",
    1: "blue",
    2: "green",
}

# Substantive reasoning frameworks, eligible for aggregate judgment.
FRAMEWORK_TAGS: tuple[str, ...] = (
    "deontological",
    "utilitarian",
    "virtue",
    "care",
    "rights",
    "imagination",
)

# Meta tags: accepted, but never counted towards a judgment.
META_TAGS: tuple[str, ...] = ("clarification", "meta")


@dataclass(frozen=True)
class CategorySet:
    """
    The set of category values a deployment accepts.

    Build one with the classmethod for the desired mode:

        CategorySet.phases()      # 0, 1, 2
        CategorySet.frameworks()  # eight framework / meta tags
        CategorySet.free_text()   # any non-empty string
    """

    mode: CategoryMode
    members: tuple[Any, ...] = ()
    substantive: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def phases(cls) -> "CategorySet":
        return cls(mode=CategoryMode.PHASE, members=tuple(PHASE_LABELS))

    @classmethod
    def frameworks(cls) -> "CategorySet":
        return cls(
            mode=CategoryMode.FRAMEWORK,
            members=FRAMEWORK_TAGS + META_TAGS,
            substantive=frozenset(FRAMEWORK_TAGS),
        )

    @classmethod
    def free_text(cls) -> "CategorySet":
        return cls(mode=CategoryMode.FREE_TEXT)

    @classmethod
    def for_mode(cls, mode: CategoryMode) -> "CategorySet":
        builders = {
            CategoryMode.PHASE: cls.phases,
            CategoryMode.FRAMEWORK: cls.frameworks,
            CategoryMode.FREE_TEXT: cls.free_text,
        }
        return builders[mode]()

    # ------------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------------

    def contains(self, value: Any) -> bool:
        if self.mode is CategoryMode.FREE_TEXT:
            return isinstance(value, str) and bool(value.strip())
        if self.mode is CategoryMode.PHASE:
            # bool is an int subclass; True must not pass as phase 1.
            return type(value) is int and value in self.members
        return isinstance(value, str) and value in self.members

    def describe(self) -> str:
        """Human-readable rendering of the accepted set, for error messages."""
        if self.mode is CategoryMode.FREE_TEXT:
            return "a non-empty string"
        values = [str(m) for m in self.members]
        return ", ".join(values[:-1]) + " or " + values[-1]

    # ------------------------------------------------------------------
    # Presentation
    # ------------------------------------------------------------------

    def label(self, value: Any) -> str:
        if self.mode is CategoryMode.PHASE:
            name = PHASE_LABELS.get(value)
            return f"PHASE {value} – {name}" if name else "PHASE ?"
        if self.mode is CategoryMode.FRAMEWORK:
            return str(value).upper()
        return str(value)

    def style(self, value: Any) -> str:
        if self.mode is CategoryMode.PHASE:
            return PHASE_STYLES.get(value, "white")
        if value in META_TAGS:
            return "bright_black"
        return "cyan"

    # ------------------------------------------------------------------
    # Tool schema
    # ------------------------------------------------------------------

    def json_schema(self) -> dict[str, Any]:
        """JSON schema fragment for the `category` input property."""
        if self.mode is CategoryMode.PHASE:
            return {
                "type": "integer",
                "enum": list(self.members),
                "description": "Jiminy phase (0: detection, 1: analysis, 2: solutions)",
            }
        if self.mode is CategoryMode.FRAMEWORK:
            return {
                "type": "string",
                "enum": list(self.members),
                "description": "Ethical framework this step reasons from",
            }
        return {"type": "string", "description": "Free-text label for this step"}
