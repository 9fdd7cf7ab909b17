import asyncio
import logging
import sys

logger = logging.getLogger(__name__)


def main():
    """Main entry point for the package."""
    # Lazy import to avoid loading heavy dependencies at package import time
    from . import server
    try:
        asyncio.run(server.main())
    except KeyboardInterrupt:
        pass
    except Exception:
        logger.exception("Fatal error")
        sys.exit(1)

# Optionally expose other important items at package level
__all__ = [
    "main",
]
