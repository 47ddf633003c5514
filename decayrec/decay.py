"""Day-based exponential decay weights for interaction events.

Table (default config):
    m[0] = 1.000
    m[i] = round_half_up(m[i-1] * 0.95, 3 places)   for i in 1..148
    m[i] = 0                                         for i >= 149

Rounding happens at every step, not once on 0.95**i, so the table matches the
fixed reference values (e.g. m[3] is 0.858, while round(0.95**3, 3) is 0.857).
"""

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP

SECONDS_PER_DAY = 24 * 3600
ZERO = Decimal(0)


@dataclass(frozen=True)
class DecayConfig:
    """Tunable parameters for the decay table."""
    rate: Decimal = Decimal("0.95")  # per-day multiplier
    size: int = 149                  # offsets 0..size-1 carry weight
    places: int = 3                  # decimal places kept at each step

    @property
    def quantum(self) -> Decimal:
        return Decimal(1).scaleb(-self.places)


@dataclass(frozen=True)
class DecayTable:
    """Immutable lookup of decay multipliers by whole-day offset."""
    multipliers: tuple = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.multipliers)

    def weight_for(self, day_offset: int) -> Decimal:
        """Multiplier for an event `day_offset` days old.

        Offsets past the end of the table are fully decayed and weigh 0.
        Negative offsets are rejected; callers decide how to treat
        future-dated events.
        """
        if day_offset < 0:
            raise ValueError(f"day offset must be >= 0, got {day_offset}")
        if day_offset >= len(self.multipliers):
            return ZERO
        return self.multipliers[day_offset]


def build_decay_table(config: DecayConfig = None) -> DecayTable:
    """Precompute the multiplier for every day offset in the table."""
    if config is None:
        config = DecayConfig()

    quantum = config.quantum
    current = Decimal(1).quantize(quantum)
    multipliers = []
    for _ in range(config.size):
        multipliers.append(current)
        current = (current * config.rate).quantize(quantum, rounding=ROUND_HALF_UP)

    return DecayTable(multipliers=tuple(multipliers))


def day_offset(now: int, timestamp: int) -> int:
    """Whole days between `timestamp` and `now`, truncated toward zero."""
    elapsed = now - timestamp
    days = abs(elapsed) // SECONDS_PER_DAY
    return days if elapsed >= 0 else -days
