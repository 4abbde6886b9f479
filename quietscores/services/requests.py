"""Latest-wins request tracking.

Starting a request on a channel cancels whatever was in flight on that
channel. A result may only be applied while its ticket is still current,
so a slow response for game A can never overwrite the detail for game B.
"""

import logging
import threading
from dataclasses import dataclass, field

from quietscores.core.interfaces import CancelToken

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestTicket:
    channel: str
    sequence: int
    cancel: CancelToken = field(default_factory=CancelToken, compare=False)


class RequestTracker:
    """Hands out monotonically increasing tickets per channel."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._sequence = 0
        self._current: dict[str, RequestTicket] = {}

    def begin(self, channel: str) -> RequestTicket:
        """Start a request on channel, cancelling the previous one."""
        with self._lock:
            self._sequence += 1
            ticket = RequestTicket(channel=channel, sequence=self._sequence)
            previous = self._current.get(channel)
            self._current[channel] = ticket

        if previous is not None and not previous.cancel.cancelled:
            logger.debug("[REQUESTS] %s #%d superseded", channel, previous.sequence)
            previous.cancel.cancel()
        return ticket

    def is_current(self, ticket: RequestTicket) -> bool:
        with self._lock:
            current = self._current.get(ticket.channel)
        return current is not None and current.sequence == ticket.sequence

    def cancel(self, channel: str) -> None:
        """Abandon whatever is in flight on channel."""
        with self._lock:
            ticket = self._current.pop(channel, None)
        if ticket is not None:
            ticket.cancel.cancel()
