"""Topology records as tracked at runtime, with declaration state and live objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .topology import (
    BindingDefinition,
    ChannelDefinition,
    ConsumerDefinition,
    ExchangeDefinition,
    FieldTable,
    Options,
    QueueDefinition,
    TopologyDefinition,
)


class QueueDefinitionInternal:
    """A queue definition plus whether it was actually declared."""

    __slots__ = ("definition", "_declared")

    def __init__(self, definition: QueueDefinition | None = None, declared: bool = False) -> None:
        self.definition = definition if definition is not None else QueueDefinition()
        self._declared = declared

    @classmethod
    def declared(cls, name: str, options: Options, arguments: FieldTable) -> QueueDefinitionInternal:
        """A queue declared with ``options`` and ``arguments``."""
        return cls(QueueDefinition(name=name, options=dict(options), arguments=dict(arguments)), True)

    @classmethod
    def undeclared(cls, name: str) -> QueueDefinitionInternal:
        """A queue known only from bindings."""
        return cls(QueueDefinition(name=name), False)

    @classmethod
    def from_definition(cls, definition: QueueDefinition) -> QueueDefinitionInternal:
        return cls(definition, True)

    def to_definition(self) -> QueueDefinition:
        return self.definition

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def options(self) -> Options | None:
        return self.definition.options

    @property
    def arguments(self) -> FieldTable | None:
        return self.definition.arguments

    @property
    def bindings(self) -> list[BindingDefinition]:
        return self.definition.bindings

    def set_declared(self, options: Options, arguments: FieldTable) -> None:
        self.definition.options = dict(options)
        self.definition.arguments = dict(arguments)
        self._declared = True

    def is_declared(self) -> bool:
        return self._declared

    def is_exclusive(self) -> bool:
        options = self.definition.options
        return bool(options.get("exclusive", False)) if options is not None else False

    def register_binding(self, source: str, routing_key: str, arguments: FieldTable) -> None:
        self.definition.bindings.append(
            BindingDefinition(source=source, routing_key=routing_key, arguments=dict(arguments))
        )

    def deregister_binding(self, source: str, routing_key: str, arguments: FieldTable) -> None:
        """Remove every binding matching source, routing key and arguments."""
        self.definition.bindings[:] = [
            binding
            for binding in self.definition.bindings
            if binding.source != source
            or binding.routing_key != routing_key
            or binding.arguments != arguments
        ]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QueueDefinitionInternal):
            return NotImplemented
        return self.definition == other.definition and self._declared == other._declared

    def __repr__(self) -> str:
        return f"QueueDefinitionInternal({self.definition!r}, declared={self._declared})"


@dataclass
class ConsumerDefinitionInternal:
    """A consumer definition plus the live consumer it came from, if any."""

    definition: ConsumerDefinition = field(default_factory=ConsumerDefinition)
    consumer: Any = None

    @classmethod
    def from_definition(cls, definition: ConsumerDefinition) -> ConsumerDefinitionInternal:
        return cls(definition=definition, consumer=None)

    def to_definition(self) -> ConsumerDefinition:
        return self.definition

    def original(self) -> Any:
        """Return the live consumer, or None if built from a definition."""
        return self.consumer

    @property
    def queue(self) -> str:
        return self.definition.queue

    @property
    def tag(self) -> str:
        return self.definition.tag

    @property
    def options(self) -> Options:
        return self.definition.options

    @property
    def arguments(self) -> FieldTable:
        return self.definition.arguments


@dataclass
class ChannelDefinitionInternal:
    """A channel's queues and consumers plus the live channel, if any."""

    channel: Any = None
    queues: list[QueueDefinitionInternal] = field(default_factory=list)
    consumers: list[ConsumerDefinitionInternal] = field(default_factory=list)

    @classmethod
    def from_definition(cls, definition: ChannelDefinition) -> ChannelDefinitionInternal:
        return cls(
            channel=None,
            queues=[QueueDefinitionInternal.from_definition(q) for q in definition.queues],
            consumers=[ConsumerDefinitionInternal.from_definition(c) for c in definition.consumers],
        )

    def to_definition(self) -> ChannelDefinition:
        return ChannelDefinition(
            queues=[q.to_definition() for q in self.queues],
            consumers=[c.to_definition() for c in self.consumers],
        )


@dataclass
class TopologyInternal:
    """The runtime form of a TopologyDefinition."""

    exchanges: list[ExchangeDefinition] = field(default_factory=list)
    queues: list[QueueDefinitionInternal] = field(default_factory=list)
    channels: list[ChannelDefinitionInternal] = field(default_factory=list)

    @classmethod
    def from_definition(cls, definition: TopologyDefinition) -> TopologyInternal:
        return cls(
            exchanges=list(definition.exchanges),
            queues=[QueueDefinitionInternal.from_definition(q) for q in definition.queues],
            channels=[ChannelDefinitionInternal.from_definition(c) for c in definition.channels],
        )

    def to_definition(self) -> TopologyDefinition:
        return TopologyDefinition(
            exchanges=list(self.exchanges),
            queues=[q.to_definition() for q in self.queues],
            channels=[c.to_definition() for c in self.channels],
        )