"""User-facing notifications."""

import logging
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

LEVELS = ("success", "info", "warning", "error")


class Notifier:
    """
    Collects messages to surface to the end user.

    The queue is a plain list so a page can bind it to session state and
    drain it on the next rerun.
    """

    def __init__(self, queue: Optional[List[Dict[str, str]]] = None):
        self.queue = queue if queue is not None else []

    def notify(self, message: str, level: str = "success") -> None:
        if level not in LEVELS:
            raise ValueError(f"Unknown notification level: {level}")
        self.queue.append({"message": message, "level": level})
        logger.debug(f"Queued {level} notification: {message}")

    @property
    def messages(self) -> List[str]:
        return [item["message"] for item in self.queue]

    def drain(self) -> List[Dict[str, str]]:
        """Remove and return every queued notification."""
        items = list(self.queue)
        self.queue.clear()
        return items
