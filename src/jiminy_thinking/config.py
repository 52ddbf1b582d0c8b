# config.py
# Environment-sourced settings. `.env` files are honoured via python-dotenv.
#
#   DISABLE_THOUGHT_LOGGING  "true" silences step rendering on stderr
#   JIMINY_CATEGORY_MODE     phase (default) | framework | free
#   JIMINY_DISABLE_JUDGMENT  "true" detaches the judgment policy

import os
from collections.abc import Mapping

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from jiminy_thinking.categories import CategoryMode, CategorySet
from jiminy_thinking.judgment import JudgmentPolicy, MarkerJudgmentPolicy

load_dotenv()


def _flag(value: str | None) -> bool:
    return (value or "").strip().lower() == "true"


class Settings(BaseModel):
    """Deployment configuration. Build with Settings.from_env()."""

    log_steps: bool = Field(default=True, description="Render accepted steps to stderr.")
    category_mode: CategoryMode = Field(default=CategoryMode.PHASE)
    judgment_enabled: bool = Field(default=True, description="Only effective in framework mode.")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """
        Read settings from `environ` (defaults to os.environ).

        Raises ValueError on an unknown category mode; there is no
        fallback set.
        """
        env = os.environ if environ is None else environ

        raw_mode = (env.get("JIMINY_CATEGORY_MODE") or CategoryMode.PHASE.value).strip().lower()
        try:
            mode = CategoryMode(raw_mode)
        except ValueError as exc:
            allowed = ", ".join(m.value for m in CategoryMode)
            raise ValueError(
                f"JIMINY_CATEGORY_MODE must be one of {allowed}, got {raw_mode!r}"
            ) from exc

        return cls(
            log_steps=not _flag(env.get("DISABLE_THOUGHT_LOGGING")),
            category_mode=mode,
            judgment_enabled=not _flag(env.get("JIMINY_DISABLE_JUDGMENT")),
        )

    # ------------------------------------------------------------------
    # Collaborators
    # ------------------------------------------------------------------

    def categories(self) -> CategorySet:
        return CategorySet.for_mode(self.category_mode)

    def judgment_policy(self) -> JudgmentPolicy | None:
        if not self.judgment_enabled or self.category_mode is not CategoryMode.FRAMEWORK:
            return None
        return MarkerJudgmentPolicy(qualifying=self.categories().substantive)
