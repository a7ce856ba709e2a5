from dataclasses import dataclass

from linkshortener.constants import Defaults


# fmt: off
@dataclass(frozen=True)
class ShortURLModel:
    target: str                         # Original long URL
    shortcode: str                      # Base62-encoded counter value identifying the link


@dataclass(frozen=True)
class CounterSettings:
    key: str = Defaults.COUNTER_KEY     # Redis key of the global counter
    start: int = Defaults.COUNTER_START # Value the counter is seeded with on first initialization
# fmt: on
