"""
Mock navigator implementation for testing page turn commands.
"""
import logging

logger = logging.getLogger(__name__)


class MockNavigator:
    """Mock navigator that logs actions instead of turning pages."""

    def __init__(self):
        """Initialize the mock navigator."""
        self.advance_count = 0
        self.retreat_count = 0

    def advance(self) -> None:
        """Log an advance instead of executing it."""
        self.advance_count += 1
        logger.info("[MockNavigator] Advance (call #%d)", self.advance_count)

    def retreat(self) -> None:
        """Log a retreat instead of executing it."""
        self.retreat_count += 1
        logger.info("[MockNavigator] Retreat (call #%d)", self.retreat_count)

    def reset_counters(self) -> None:
        """Reset action counters for testing."""
        self.advance_count = 0
        self.retreat_count = 0
