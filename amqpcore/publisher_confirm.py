"""Outcome of a publish on a channel, and an awaitable for it."""

from __future__ import annotations

import asyncio
import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generator

if TYPE_CHECKING:
    from .returned_messages import ReturnedMessage, ReturnedMessages

logger = logging.getLogger(__name__)


class ConfirmationKind(enum.Enum):
    """How the broker answered a publish."""

    ACK = "ack"
    NACK = "nack"
    NOT_REQUESTED = "not_requested"


@dataclass(frozen=True)
class Confirmation:
    """A broker acknowledgement, optionally carrying a returned message."""

    kind: ConfirmationKind
    message: ReturnedMessage | None = None

    @classmethod
    def ack(cls, message: ReturnedMessage | None = None) -> Confirmation:
        return cls(ConfirmationKind.ACK, message)

    @classmethod
    def nack(cls, message: ReturnedMessage | None = None) -> Confirmation:
        return cls(ConfirmationKind.NACK, message)

    @classmethod
    def not_requested(cls) -> Confirmation:
        """The channel is not in confirm mode, so nothing was confirmed."""
        return cls(ConfirmationKind.NOT_REQUESTED)

    def take_message(self) -> ReturnedMessage | None:
        """Return the returned message carried by an ack or nack, if any."""
        if self.kind is ConfirmationKind.NOT_REQUESTED:
            return None
        return self.message

    def is_ack(self) -> bool:
        return self.kind is ConfirmationKind.ACK

    def is_nack(self) -> bool:
        return self.kind is ConfirmationKind.NACK


class PublisherConfirm:
    """Awaitable for a publish confirmation.

    The wrapped future may be a ``concurrent.futures.Future`` or an asyncio
    future.  If this object is released without being awaited to completion,
    the future is handed to the returned-messages store so that any message it
    carries is not lost.
    """

    def __init__(self, future: Any, returned_messages: ReturnedMessages) -> None:
        self._future: Any = future
        self._returned_messages = returned_messages

    @classmethod
    def not_requested(cls, returned_messages: ReturnedMessages) -> PublisherConfirm:
        """An already resolved confirm for a channel without confirm mode."""
        from concurrent.futures import Future

        future: Future = Future()
        future.set_result(Confirmation.not_requested())
        return cls(future, returned_messages)

    def __await__(self) -> Generator[Any, None, Confirmation]:
        future = self._future
        if future is None:
            raise RuntimeError("PublisherConfirm awaited after completion")
        try:
            return (yield from asyncio.wrap_future(future).__await__())
        finally:
            if future.done():
                self._future = None

    def release(self) -> None:
        """Give an unconsumed confirmation to the returned-messages store."""
        future, self._future = self._future, None
        if future is not None:
            logger.debug(
                "PublisherConfirm dropped without use, registering it for wait_for_confirms"
            )
            self._returned_messages.register_dropped_confirm(future)

    def __del__(self) -> None:
        if getattr(self, "_future", None) is not None:
            self.release()

    def __repr__(self) -> str:
        return "PublisherConfirm()"