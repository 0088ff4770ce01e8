import logging

logger = logging.getLogger(__name__)


class AnnealingScheduler:
    """Cools the simulation from factor 1 down to 0 over `duration` seconds.

    Once the factor hits 0 the layout is frozen for the rest of the run;
    only `reset()` brings it back.
    """

    def __init__(self, duration):
        self.duration = duration
        self.reset()

    def reset(self):
        self.elapsed = 0.0
        self.frozen = self.duration == 0

    def factor(self, elapsed):
        """max(0, 1 - elapsed / duration), capped at 1 for negative elapsed."""
        if self.duration == 0:
            return 0.0
        return min(1.0, max(0.0, 1.0 - elapsed / self.duration))

    def advance(self, elapsed):
        """Moves the clock to `elapsed` and returns the factor for this frame.

        The clock never runs backwards, so the returned factor is
        non-increasing across calls.
        """
        if elapsed > self.elapsed:
            self.elapsed = elapsed
        if self.frozen:
            return 0.0
        value = self.factor(self.elapsed)
        if value == 0.0:
            self.frozen = True
            logger.info(f"Layout frozen after {self.elapsed:.2f}s")
        return value

    @property
    def is_frozen(self):
        return self.frozen
