"""Serializable description of the exchanges, queues, channels and consumers of a connection."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .amqp_queue import Queue

FieldTable = dict[str, Any]
Options = dict[str, bool]


def _mapping(data: Any, owner: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise TypeError(f"{owner}: expected a mapping, got {type(data).__name__}")
    return data


def _require(data: Mapping[str, Any], key: str, owner: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise ValueError(f"{owner}: missing field {key!r}") from None


def _optional_dict(value: Mapping[str, Any] | None) -> dict[str, Any] | None:
    return None if value is None else dict(value)


@dataclass
class BindingDefinition:
    """A binding from a source exchange with a routing key and arguments."""

    source: str
    routing_key: str
    arguments: FieldTable = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "routing_key": self.routing_key,
            "arguments": dict(self.arguments),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BindingDefinition:
        data = _mapping(data, cls.__name__)
        return cls(
            source=_require(data, "source", cls.__name__),
            routing_key=_require(data, "routing_key", cls.__name__),
            arguments=dict(data.get("arguments") or {}),
        )


@dataclass
class ExchangeDefinition:
    """An exchange; kind, options and arguments are None if it was only bound to."""

    name: str = ""
    kind: str | None = None
    options: Options | None = None
    arguments: FieldTable | None = None
    bindings: list[BindingDefinition] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind,
            "options": _optional_dict(self.options),
            "arguments": _optional_dict(self.arguments),
            "bindings": [binding.to_dict() for binding in self.bindings],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ExchangeDefinition:
        data = _mapping(data, cls.__name__)
        return cls(
            name=_require(data, "name", cls.__name__),
            kind=data.get("kind"),
            options=_optional_dict(data.get("options")),
            arguments=_optional_dict(data.get("arguments")),
            bindings=[BindingDefinition.from_dict(b) for b in data.get("bindings") or []],
        )


@dataclass
class QueueDefinition:
    """A queue; options and arguments are None if it was only bound to."""

    name: str = ""
    options: Options | None = None
    arguments: FieldTable | None = None
    bindings: list[BindingDefinition] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "options": _optional_dict(self.options),
            "arguments": _optional_dict(self.arguments),
            "bindings": [binding.to_dict() for binding in self.bindings],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> QueueDefinition:
        data = _mapping(data, cls.__name__)
        return cls(
            name=_require(data, "name", cls.__name__),
            options=_optional_dict(data.get("options")),
            arguments=_optional_dict(data.get("arguments")),
            bindings=[BindingDefinition.from_dict(b) for b in data.get("bindings") or []],
        )


@dataclass
class ConsumerDefinition:
    """A consumer on a queue."""

    queue: str = ""
    tag: str = ""
    options: Options = field(default_factory=dict)
    arguments: FieldTable = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "queue": self.queue,
            "tag": self.tag,
            "options": dict(self.options),
            "arguments": dict(self.arguments),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ConsumerDefinition:
        data = _mapping(data, cls.__name__)
        return cls(
            queue=_require(data, "queue", cls.__name__),
            tag=data.get("tag") or "",
            options=dict(data.get("options") or {}),
            arguments=dict(data.get("arguments") or {}),
        )


@dataclass
class ChannelDefinition:
    """A channel with its exclusive queues and its consumers."""

    queues: list[QueueDefinition] = field(default_factory=list)
    consumers: list[ConsumerDefinition] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "queues": [queue.to_dict() for queue in self.queues],
            "consumers": [consumer.to_dict() for consumer in self.consumers],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ChannelDefinition:
        data = _mapping(data, cls.__name__)
        consumers = _require(data, "consumers", cls.__name__)
        return cls(
            queues=[QueueDefinition.from_dict(q) for q in data.get("queues") or []],
            consumers=[ConsumerDefinition.from_dict(c) for c in consumers],
        )


@dataclass
class TopologyDefinition:
    """Exchanges, non-exclusive queues and channels declared on a connection."""

    exchanges: list[ExchangeDefinition] = field(default_factory=list)
    queues: list[QueueDefinition] = field(default_factory=list)
    channels: list[ChannelDefinition] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "exchanges": [exchange.to_dict() for exchange in self.exchanges],
            "queues": [queue.to_dict() for queue in self.queues],
            "channels": [channel.to_dict() for channel in self.channels],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TopologyDefinition:
        data = _mapping(data, cls.__name__)
        return cls(
            exchanges=[ExchangeDefinition.from_dict(e) for e in data.get("exchanges") or []],
            queues=[QueueDefinition.from_dict(q) for q in data.get("queues") or []],
            channels=[ChannelDefinition.from_dict(c) for c in data.get("channels") or []],
        )


@dataclass
class RestoredChannel:
    """A channel recreated from a topology, with its queues and consumers.

    Attribute lookups not found here are forwarded to the wrapped channel.
    """

    channel: Any
    queues: list[Queue] = field(default_factory=list)
    consumers: list[Any] = field(default_factory=list)

    def __getattr__(self, name: str) -> Any:
        if name in ("channel", "queues", "consumers") or name.startswith("__"):
            raise AttributeError(name)
        return getattr(self.channel, name)

    def into_inner(self) -> Any:
        """Return the wrapped channel."""
        return self.channel

    def queue(self, index: int) -> Queue:
        return self.queues[index]

    def consumer(self, index: int) -> Any:
        return self.consumers[index]


@dataclass
class RestoredTopology:
    """The queues and channels recreated from a topology."""

    queues: list[Queue] = field(default_factory=list)
    channels: list[RestoredChannel] = field(default_factory=list)

    def queue(self, index: int) -> Queue:
        return self.queues[index]

    def channel(self, index: int) -> RestoredChannel:
        return self.channels[index]