"""Configuration management for loan-ledger."""

from dataclasses import dataclass, field
from datetime import datetime

from loan_ledger.engine.dates import naive_utc
from loan_ledger.exceptions import ConfigurationError
from loan_ledger.logging import FORMAT_TYPES, setup_logging


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format_type: str = "standard"


@dataclass
class LedgerConfig:
    """Main configuration for loan-ledger.

    ``as_of`` pins the clock used by the store when it re-derives statuses.
    Leave it unset to evaluate against the system clock.
    """

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    as_of: datetime | None = None
    sync_status: bool = True

    def now(self) -> datetime:
        """Return the instant records should be evaluated at.

        A pinned offset-aware instant is returned as naive UTC, the convention
        record timestamps are stored in.
        """
        if self.as_of is not None:
            return naive_utc(self.as_of)
        return datetime.now()

    def configure_logging(self) -> None:
        """Apply the logging section via :func:`setup_logging`."""
        setup_logging(level=self.logging.level, format_type=self.logging.format_type)

    @classmethod
    def from_env(cls) -> "LedgerConfig":
        """Create config from environment variables."""
        import os

        format_type = os.getenv("LOG_FORMAT", "standard")
        if format_type not in FORMAT_TYPES:
            raise ConfigurationError(
                f"LOG_FORMAT must be one of {', '.join(FORMAT_TYPES)}, got {format_type!r}"
            )

        logging_config = LoggingConfig(
            level=os.getenv("LOG_LEVEL", "INFO"),
            format_type=format_type,
        )

        as_of_str = os.getenv("LEDGER_AS_OF")
        as_of = _parse_as_of(as_of_str) if as_of_str else None

        return cls(
            logging=logging_config,
            as_of=as_of,
            sync_status=os.getenv("LEDGER_SYNC_STATUS", "true").lower() == "true",
        )


def _parse_as_of(value: str) -> datetime:
    """Parse an ISO-8601 date or datetime into a naive UTC datetime.

    A bare date evaluates at midnight; a ``Z`` or numeric offset is converted
    to UTC.
    """
    text = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        return naive_utc(datetime.fromisoformat(text))
    except ValueError as exc:
        raise ConfigurationError(f"LEDGER_AS_OF is not an ISO-8601 date: {value!r}") from exc
