"""Perch configuration.

PerchConfig is the central configuration object, frozen after creation.
"""

from dataclasses import dataclass

from perch._errors import ConfigError


@dataclass(frozen=True, slots=True)
class PerchConfig:
    """Configuration shared by observers and lifecycle drivers.

    Attributes:
        wait_timeout: Upper bound in seconds applied to ``await_value()`` and
            ``await_next_value()`` when they are called without a timeout.
            ``None`` means such waits block until a value arrives.
        max_events: Capacity of the event log created for a collector.
        value_repr_limit: Maximum length of a value's ``repr`` stored in
            recorded events; longer reprs are truncated with ``...``.

    """

    wait_timeout: float | None = None
    max_events: int = 10_000
    value_repr_limit: int = 200

    def __post_init__(self) -> None:
        if self.wait_timeout is not None:
            if isinstance(self.wait_timeout, bool) or not isinstance(
                self.wait_timeout, (int, float)
            ):
                msg = f"wait_timeout must be a number, got {self.wait_timeout!r}"
                raise ConfigError(msg)
            if self.wait_timeout < 0:
                msg = f"wait_timeout must be >= 0, got {self.wait_timeout}"
                raise ConfigError(msg)
        if self.max_events < 1:
            msg = f"max_events must be >= 1, got {self.max_events}"
            raise ConfigError(msg)
        if self.value_repr_limit < 4:
            msg = f"value_repr_limit must be >= 4, got {self.value_repr_limit}"
            raise ConfigError(msg)

    def resolve_timeout(self, timeout: float | None) -> float | None:
        """Return the timeout a wait should use.

        An explicit timeout always wins; otherwise ``wait_timeout`` applies.
        """
        if timeout is not None:
            return timeout
        return self.wait_timeout

    def clip_repr(self, value: object) -> str:
        """``repr(value)`` truncated to ``value_repr_limit`` characters."""
        text = repr(value)
        if len(text) <= self.value_repr_limit:
            return text
        return text[: self.value_repr_limit - 3] + "..."


DEFAULT_CONFIG = PerchConfig()
