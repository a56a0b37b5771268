import logging
from typing import Hashable, Set

logger = logging.getLogger(__name__)


class SeenItems:
    """Remembers items so that each one is reported only once.

    The owner decides the scope, e.g. one instance per mining run.
    """

    def __init__(self) -> None:
        self.memory: Set[Hashable] = set()

    def look(self, item: Hashable) -> bool:
        """Log the item the first time it is looked at.

        Returns True if the item was not seen before.
        """
        if item in self.memory:
            return False
        logger.info(f"item = {item}")
        self.memory.add(item)
        return True

    def __contains__(self, item: Hashable) -> bool:
        return item in self.memory

    def __len__(self) -> int:
        return len(self.memory)
