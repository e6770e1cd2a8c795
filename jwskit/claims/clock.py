"""Wall-clock access as Unix seconds."""

from collections.abc import Callable
from datetime import UTC, datetime

Clock = Callable[[], int]


def since_unix_epoch_secs(moment: datetime) -> int:
    """Seconds since the epoch; naive datetimes are read as UTC, pre-epoch clamps to 0."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return max(0, int(moment.timestamp()))


def now_secs() -> int:
    return since_unix_epoch_secs(datetime.now(UTC))
