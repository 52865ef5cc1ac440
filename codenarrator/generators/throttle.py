"""Request throttling between consecutive provider calls."""

import logging
import time
from typing import Callable

logger = logging.getLogger(__name__)


class FixedDelayThrottle:
    """Sleeps a fixed interval each time ``wait`` is called.

    Args:
        delay: Seconds to sleep between requests.
        sleep: Sleep function, replaceable in tests.
    """

    def __init__(
        self, delay: float = 0.5, sleep: Callable[[float], None] = time.sleep
    ) -> None:
        self.delay = max(delay, 0.0)
        self._sleep = sleep

    def wait(self) -> None:
        """Block for the configured delay."""
        if self.delay:
            logger.debug("Throttling: sleeping %.2f seconds", self.delay)
            self._sleep(self.delay)
