"""Process entry for the animator."""

from __future__ import annotations

import logging

from .lifecycle import Session


def main() -> int:
    """Run the digital rain until interrupted and return the exit status."""

    logging.basicConfig(level=logging.WARNING, format="%(message)s")
    return Session().run()
