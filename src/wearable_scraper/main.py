"""Application entrypoint (scheduler + FastAPI)."""

import asyncio
import sys

from .config.settings import get_settings
from .http_server import run_http_server
from .lifespan import lifespan_manager


async def main() -> None:
    """Main application entrypoint."""
    async with lifespan_manager():
        if get_settings().http_enable:
            await run_http_server()
        else:
            # Scheduler-only mode: keep the loop alive for the timer task.
            await asyncio.Event().wait()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\nShutting down...")
        sys.exit(0)
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        sys.exit(1)
