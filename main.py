"""
Daily Planner — Entry Point.

Single entry point: `python main.py` prints today's briefing and runs the
deadline reminder loop.
"""

import logging

from src.config import settings

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

from src.app import main

if __name__ == "__main__":
    main()
