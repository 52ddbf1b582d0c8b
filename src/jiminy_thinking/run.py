# run.py
# Entry point. Config and wiring only — no logic lives here.
#
# Environment (or .env):
#   DISABLE_THOUGHT_LOGGING=true   silence step panels on stderr
#   JIMINY_CATEGORY_MODE=framework switch to framework tags + judgment

import asyncio
import sys

from jiminy_thinking import display
from jiminy_thinking.config import Settings
from jiminy_thinking.dispatcher import StepDispatcher
from jiminy_thinking.ledger import StepLedger
from jiminy_thinking.server import build_server, serve
from jiminy_thinking.tool import TOOL_NAME


def main() -> None:
    try:
        settings = Settings.from_env()
        categories = settings.categories()
        dispatcher = StepDispatcher(
            ledger=StepLedger(judgment_policy=settings.judgment_policy()),
            categories=categories,
            log_steps=settings.log_steps,
        )
        server = build_server(dispatcher)
        display.server_running(TOOL_NAME, categories)
        asyncio.run(serve(server))
    except Exception as exc:
        # Startup and transport faults are unrecoverable.
        display.fatal(exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
