"""Storage for messages the broker returned as unroutable."""

from __future__ import annotations

import logging
import threading
from collections import deque
from dataclasses import dataclass, field
from typing import Any

from .publisher_confirm import Confirmation

logger = logging.getLogger(__name__)


@dataclass
class ReturnedMessage:
    """A message sent back by the broker with the reason for returning it."""

    exchange: str = ""
    routing_key: str = ""
    reply_code: int = 0
    reply_text: str = ""
    properties: dict[str, Any] = field(default_factory=dict)
    data: bytes = b""

    def receive_content(self, payload: bytes) -> None:
        """Append a body frame's payload to the message data."""
        self.data += bytes(payload)


def _carried_message(future: Any) -> ReturnedMessage | None:
    """Return the message a finished confirmation future carries, if any."""
    if future.cancelled() or future.exception() is not None:
        return None
    result = future.result()
    if isinstance(result, Confirmation):
        return result.take_message()
    return None


class ReturnedMessages:
    """Assembles returned messages from frames and collects them for callers."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._current_message: ReturnedMessage | None = None
        self._non_confirm_messages: list[ReturnedMessage] = []
        self._waiting_messages: deque[ReturnedMessage] = deque()
        self._messages: list[ReturnedMessage] = []
        self._dropped_confirms: list[Any] = []

    def start_new_delivery(self, message: ReturnedMessage) -> None:
        with self._lock:
            self._current_message = message

    def handle_content_header_frame(
        self, size: int, properties: dict[str, Any], confirm_mode: bool
    ) -> None:
        with self._lock:
            if self._current_message is not None:
                self._current_message.properties = properties
            if size == 0:
                self._delivery_complete(confirm_mode)

    def handle_body_frame(self, remaining_size: int, payload: bytes, confirm_mode: bool) -> None:
        with self._lock:
            if self._current_message is not None:
                self._current_message.receive_content(payload)
            if remaining_size == 0:
                self._delivery_complete(confirm_mode)

    def _delivery_complete(self, confirm_mode: bool) -> None:
        message, self._current_message = self._current_message, None
        if message is None:
            return
        logger.warning("Server returned us a message: %r", message)
        if confirm_mode:
            self._waiting_messages.append(message)
        else:
            self._non_confirm_messages.append(message)

    def register_dropped_confirm(self, future: Any) -> None:
        """Keep the message of a finished confirm, or the confirm itself if pending."""
        with self._lock:
            if future.done():
                message = _carried_message(future)
                if message is not None:
                    logger.debug("Dropped PublisherConfirm was carrying a message, storing it")
                    self._messages.append(message)
                else:
                    logger.debug(
                        "Dropped PublisherConfirm was ready but didn't carry a message, discarding"
                    )
            else:
                logger.debug("Storing dropped PublisherConfirm for further use")
                self._dropped_confirms.append(future)

    def drain(self) -> list[ReturnedMessage]:
        """Return and forget every collected message.

        Messages returned outside confirm mode come first, then those taken
        from dropped confirms.  Confirms still pending are kept for later.
        """
        with self._lock:
            messages = self._non_confirm_messages + self._messages
            self._non_confirm_messages = []
            self._messages = []
            pending = self._dropped_confirms
            if pending:
                self._dropped_confirms = []
                for future in pending:
                    if future.done():
                        message = _carried_message(future)
                        if message is not None:
                            messages.append(message)
                    else:
                        self._dropped_confirms.append(future)
                logger.debug(
                    "PublisherConfirms processed: before=%d after=%d",
                    len(pending),
                    len(self._dropped_confirms),
                )
            return messages

    def get_waiting_message(self) -> ReturnedMessage | None:
        """Pop the oldest message returned in confirm mode, or None."""
        with self._lock:
            return self._waiting_messages.popleft() if self._waiting_messages else None

    def __repr__(self) -> str:
        if not self._lock.acquire(blocking=False):
            return "ReturnedMessages()"
        try:
            return (
                f"ReturnedMessages(waiting_messages={list(self._waiting_messages)!r}, "
                f"messages={self._messages!r}, "
                f"non_confirm_messages={self._non_confirm_messages!r})"
            )
        finally:
            self._lock.release()