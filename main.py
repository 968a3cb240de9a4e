"""
main.py — Entry point.

Run with:
    python main.py

Requires:
    pip install pygame
"""

import logging

from gridsnake.config import LOG_LEVEL
from gridsnake.controller import GameController


def main() -> None:
    logging.basicConfig(level=LOG_LEVEL, format="[%(levelname)s] %(message)s")
    GameController().run()


if __name__ == "__main__":
    main()
