"""Thread-safe record of declared exchanges, queues and bindings."""

from __future__ import annotations

import copy
import threading

from .topology import BindingDefinition, ExchangeDefinition, FieldTable, Options
from .topology_internal import QueueDefinitionInternal


class Registry:
    """Tracks what was declared so the topology can be exported or restored."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._exchanges: dict[str, ExchangeDefinition] = {}
        self._queues: dict[str, QueueDefinitionInternal] = {}

    def exchanges_topology(self) -> list[ExchangeDefinition]:
        """Return copies of all known exchanges."""
        with self._lock:
            return copy.deepcopy(list(self._exchanges.values()))

    def queues_topology(self, exclusive: bool) -> list[QueueDefinitionInternal]:
        """Return copies of the queues whose exclusivity equals ``exclusive``."""
        with self._lock:
            return copy.deepcopy(
                [q for q in self._queues.values() if q.is_exclusive() == exclusive]
            )

    def register_exchange(self, name: str, kind: str, options: Options, arguments: FieldTable) -> None:
        with self._lock:
            exchange = self._exchanges.get(name)
            if exchange is not None:
                exchange.kind = kind
                exchange.options = dict(options)
                exchange.arguments = dict(arguments)
            else:
                self._exchanges[name] = ExchangeDefinition(
                    name=name, kind=kind, options=dict(options), arguments=dict(arguments)
                )

    def deregister_exchange(self, name: str) -> None:
        with self._lock:
            self._exchanges.pop(name, None)

    def register_exchange_binding(
        self, destination: str, source: str, routing_key: str, arguments: FieldTable
    ) -> None:
        with self._lock:
            exchange = self._exchanges.setdefault(destination, ExchangeDefinition(name=destination))
            exchange.bindings.append(
                BindingDefinition(source=source, routing_key=routing_key, arguments=dict(arguments))
            )

    def deregister_exchange_binding(
        self, destination: str, source: str, routing_key: str, arguments: FieldTable
    ) -> None:
        with self._lock:
            exchange = self._exchanges.get(destination)
            if exchange is None:
                return
            exchange.bindings[:] = [
                binding
                for binding in exchange.bindings
                if binding.source != source
                or binding.routing_key != routing_key
                or binding.arguments != arguments
            ]

    def register_queue(self, name: str, options: Options, arguments: FieldTable) -> None:
        with self._lock:
            queue = self._queues.get(name)
            if queue is not None:
                queue.set_declared(options, arguments)
            else:
                self._queues[name] = QueueDefinitionInternal.declared(name, options, arguments)

    def deregister_queue(self, name: str) -> None:
        with self._lock:
            self._queues.pop(name, None)

    def register_queue_binding(
        self, destination: str, source: str, routing_key: str, arguments: FieldTable
    ) -> None:
        with self._lock:
            queue = self._queues.get(destination)
            if queue is None:
                queue = self._queues[destination] = QueueDefinitionInternal.undeclared(destination)
            queue.register_binding(source, routing_key, arguments)

    def deregister_queue_binding(
        self, destination: str, source: str, routing_key: str, arguments: FieldTable
    ) -> None:
        with self._lock:
            queue = self._queues.get(destination)
            if queue is not None:
                queue.deregister_binding(source, routing_key, arguments)