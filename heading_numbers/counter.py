"""Per-level heading counters."""

from __future__ import annotations

from .config import NumberingConfig
from .constants import MAX_HEADING_LEVEL
from .converter import convert


class CounterEngine:
    """Hold one counter per heading level and render serial numbers from them.

    Counters belong to the instance. Create one engine per document (or call
    `reset` between documents); engines must not be shared between concurrent
    callers.

    Args:
        config: Level range, separator and styles to number with. Defaults
            to `NumberingConfig()`.

    Examples:
        engine = CounterEngine(NumberingConfig(start_level=1, end_level=3))
        [engine.generate_serial_number(level) for level in (1, 2, 2, 3)]
        # ["1", "1.1", "1.2", "1.2.1"]
    """

    def __init__(self, config: NumberingConfig | None = None):
        self.config = config or NumberingConfig()
        self.counters = [0] * MAX_HEADING_LEVEL

    def reset(self) -> None:
        """Set every counter back to zero."""
        self.counters = [0] * MAX_HEADING_LEVEL

    def generate_serial_number(self, level: int) -> str:
        """Advance the counter for `level` and render the resulting serial number.

        Levels outside ``start_level..end_level`` return an empty string and
        leave the counters untouched. Otherwise the level's counter goes up by
        one, every deeper counter drops to zero, and the counters from
        ``start_level`` down to `level` are rendered and joined with the
        separator. A zero counter (a skipped ancestor level) renders as 1.

        Args:
            level: Heading level, 1-6.

        Returns:
            str: Serial number, or an empty string when the level is not numbered.
        """
        config = self.config
        if level < config.start_level or level > config.end_level:
            return ""

        self.counters[level - 1] += 1
        for index in range(level, MAX_HEADING_LEVEL):
            self.counters[index] = 0

        parts = []
        for current in range(config.start_level, level + 1):
            value = self.counters[current - 1] or 1
            parts.append(convert(value, config.style_for(current)))
        return config.separator.join(parts)
