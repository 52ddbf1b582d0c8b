# tool.py
# Tool descriptor published to the host: name, guidance text, input schema.
#
# The guidance is static text for the calling model. The ledger enforces
# none of it — phase order is the caller's discipline.

from typing import Any

from jiminy_thinking.categories import CategorySet

TOOL_NAME = "jiminy_sequential_thinking"

SERVER_NAME = "jiminy-sequential-thinking-server"
SERVER_VERSION = "1.0.0"

TOOL_GUIDANCE = """\
Structured, step-by-step ethical reasoning. Record one step per call.

Value hierarchy (default, most protective interpretation wins):
  1. Dignity & integrity of the person (non-derogable red lines: life,
     physical/mental integrity, no torture, slavery or degrading treatment).
  2. Freedoms & privacy, including consent and data protection.
  3. Equality & non-discrimination.
  4. Justice & rule of law.
  5. Solidarity & social rights (health, environment, consumers).
  6. Citizens' rights & good administration.

Phases:
  PHASE 0 – Detection: check that a genuine value tension exists. Reject
    false dilemmas, disguised preferences, exaggerated consequences and
    staged urgency; if there is no real ethical issue, explain why and set
    continuation = false.
  PHASE 1 – Multi-perspective analysis: name the values, actors and
    frameworks in tension (deontological, utilitarian, virtue, care,
    rights-based), contextualize, and list uncertainties.
  PHASE 2 – Solutions & moral imagination: compare realistic options beyond
    A/B, state moral remainders, and justify the preferred path with its
    limits.

Guide, do not decide. Mark every step with its category.

Bookkeeping:
  - index / estimatedTotal: position and current estimate; the estimate is
    raised automatically when index exceeds it.
  - isRevision + revisesIndex: reconsider an earlier step (history is never
    rewritten; the revision is a new step).
  - branchFromIndex + branchId: explore an alternative line; both are
    required for the step to be filed under the branch.
  - needsMore: signal that the estimate is too low.
  - followupHint: suggested framing for the next step.\
"""


def input_schema(categories: CategorySet) -> dict[str, Any]:
    """JSON schema of the tool payload for the configured category set."""
    return {
        "type": "object",
        "properties": {
            "text": {
                "type": "string",
                "description": "Your current step of reasoning, following the phase structure",
            },
            "continuation": {
                "type": "boolean",
                "description": "Whether another step is needed",
            },
            "index": {
                "type": "integer",
                "description": "Current step number (1, 2, 3, ...)",
                "minimum": 1,
            },
            "estimatedTotal": {
                "type": "integer",
                "description": "Estimated total steps needed (can increase or decrease)",
                "minimum": 1,
            },
            "category": categories.json_schema(),
            "isRevision": {
                "type": "boolean",
                "description": "Whether this revises a previous step",
            },
            "revisesIndex": {
                "type": "integer",
                "description": "Which step is being reconsidered",
                "minimum": 1,
            },
            "branchFromIndex": {
                "type": "integer",
                "description": "Branching point step number",
                "minimum": 1,
            },
            "branchId": {
                "type": "string",
                "description": "Branch identifier",
            },
            "needsMore": {
                "type": "boolean",
                "description": "If more steps are needed",
            },
            "followupHint": {
                "type": "string",
                "description": "Suggested framing for the next step",
            },
        },
        "required": ["text", "continuation", "index", "estimatedTotal", "category"],
    }


def tool_descriptor(categories: CategorySet) -> dict[str, Any]:
    return {
        "name": TOOL_NAME,
        "description": TOOL_GUIDANCE,
        "inputSchema": input_schema(categories),
    }
