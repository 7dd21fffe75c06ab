"""A declared queue as reported by the broker."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Queue:
    """A queue's name with its message and consumer counts."""

    name: str
    message_count: int = 0
    consumer_count: int = 0

    def __str__(self) -> str:
        return self.name