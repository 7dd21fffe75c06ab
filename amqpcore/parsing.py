"""A parsing input made of up to two byte buffers viewed as one."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from itertools import chain


class Incomplete(Exception):
    """Raised when more bytes are needed than the input holds."""

    def __init__(self, needed: int) -> None:
        super().__init__(f"{needed} more byte(s) needed")
        self.needed = needed


class ParsingContext:
    """Two contiguous byte buffers presented as a single input.

    This lets a parser run over data that wraps around the end of a ring
    buffer without copying it into one piece first.
    """

    __slots__ = ("_first", "_second")

    def __init__(self, first: bytes = b"", second: bytes = b"") -> None:
        self._first = bytes(first)
        self._second = bytes(second)

    @property
    def buffers(self) -> tuple[bytes, bytes]:
        """The two underlying buffers, in order."""
        return self._first, self._second

    def __len__(self) -> int:
        return len(self._first) + len(self._second)

    def __iter__(self) -> Iterator[int]:
        return chain(self._first, self._second)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParsingContext):
            return NotImplemented
        return self.buffers == other.buffers

    def __hash__(self) -> int:
        return hash(self.buffers)

    def __repr__(self) -> str:
        return f"ParsingContext({self._first!r}, {self._second!r})"

    def position(self, predicate: Callable[[int], bool]) -> int | None:
        """Return the index of the first byte matching ``predicate``, or None."""
        return next((i for i, b in enumerate(self) if predicate(b)), None)

    def slice_index(self, count: int) -> int:
        """Return ``count`` if that many bytes are available, else raise Incomplete."""
        available = len(self)
        if available >= count:
            return count
        raise Incomplete(count - available)

    def _check(self, count: int) -> None:
        if count < 0 or count > len(self):
            raise IndexError(f"position {count} out of range for input of length {len(self)}")

    def take(self, count: int) -> ParsingContext:
        """Return the first ``count`` bytes."""
        self._check(count)
        if len(self._first) > count:
            return ParsingContext(self._first[:count])
        needed = count - len(self._first)
        return ParsingContext(self._first, self._second[:needed])

    def take_split(self, count: int) -> tuple[ParsingContext, ParsingContext]:
        """Split at ``count``, returning ``(rest, taken)``."""
        self._check(count)
        if len(self._first) > count:
            return (
                ParsingContext(self._first[count:], self._second),
                ParsingContext(self._first[:count]),
            )
        needed = count - len(self._first)
        return (
            ParsingContext(self._second[needed:]),
            ParsingContext(self._first, self._second[:needed]),
        )

    def slice_from(self, start: int) -> ParsingContext:
        """Return everything from ``start`` onwards."""
        self._check(start)
        if start < len(self._first):
            return ParsingContext(self._first[start:], self._second)
        needed = start - len(self._first)
        return ParsingContext(self._second[needed:])

    def to_bytes(self) -> bytes:
        """Return the whole input as one bytes object."""
        return self._first + self._second