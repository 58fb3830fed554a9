"""Processing clock.

Provides now() plus get_clock() / set_clock() / reset_clock() so card expiry
and payment timestamps can be evaluated at a fixed instant in tests.
"""

from collections.abc import Callable
from datetime import UTC, datetime

Clock = Callable[[], datetime]

_current_clock: Clock | None = None


def system_clock() -> datetime:
    return datetime.now(UTC)


def get_clock() -> Clock:
    """Return the current clock. Defaults to the system clock."""
    return _current_clock or system_clock


def set_clock(clock: Clock) -> None:
    """Override the active clock (useful for tests)."""
    global _current_clock
    _current_clock = clock


def reset_clock() -> None:
    """Reset to the system clock."""
    global _current_clock
    _current_clock = None


def now() -> datetime:
    return get_clock()()
