# amqpcore

Building blocks for an AMQP 0-9-1 client. They can be used on their own and
need only the standard library.

## Modules

- `amqpcore.parsing`: `ParsingContext` is a read-only view over two byte
  buffers that acts as one continuous input. A frame that spans the
  wrap-around point of a ring buffer can be parsed without first being
  copied into one piece. It supports `len()`, iteration over byte values,
  `position(predicate)`, `take(count)`, `take_split(count)` (returns
  `(rest, taken)`), `slice_from(start)` and `to_bytes()`. If more bytes are
  asked for than the input holds, `slice_index(count)` raises `Incomplete`,
  and its `needed` attribute gives the shortfall. `take`, `take_split` and
  `slice_from` raise `IndexError` for a position outside the input.
- `amqpcore.amqp_queue`: `Queue` is a frozen dataclass holding a queue's
  `name`, `message_count` and `consumer_count`. `str()` of a queue is its
  name.
- `amqpcore.socket_state`: `SocketState` records whether a socket is
  `readable` and `writable`. Events (`SocketEvent.READABLE`, `WRITABLE`,
  `WAKE`) come in through a thread-safe `SocketStateHandle`.
  `poll_events()` applies every event already queued and `wait()` blocks
  until the next one. A `None` result passed to `handle_read_poll` or
  `handle_write_poll` marks the socket as not ready. `handle_io_result`
  wakes the state on `InterruptedError`, ignores `BlockingIOError` and
  raises any other error again.
- `amqpcore.thread_handle`: `ResultThread` keeps its target's return value,
  or the exception the target raised. `ThreadHandle` holds one registered
  thread. `wait(context)` joins that thread, unless it is called from the
  thread itself, and then raises again any exception the thread's work
  ended with. An exit by a non-`Exception` is reported as `RuntimeError(context)`.
- `amqpcore.wakers`: `Wakers` collects callbacks, skipping any that is equal
  to one already registered. `wake()` calls each of them once and then
  clears the set.
- `amqpcore.topology`: `ExchangeDefinition`, `QueueDefinition`,
  `BindingDefinition`, `ChannelDefinition`, `ConsumerDefinition` and
  `TopologyDefinition` are dataclasses. Each has `to_dict()` and
  `from_dict()`, so a topology can be stored as JSON. `from_dict` raises
  `TypeError` for input that is not a mapping and `ValueError` when a
  required field is missing. `RestoredTopology` and `RestoredChannel` hold
  the queues, channels and consumers that were recreated from a topology.
- `amqpcore.topology_internal`: the forms of the same definitions used while
  running (`QueueDefinitionInternal`, `ConsumerDefinitionInternal`,
  `ChannelDefinitionInternal`, `TopologyInternal`). They record whether a
  queue was declared and which live objects they came from, and
  `from_definition` / `to_definition` convert them to and from the
  definitions above.
- `amqpcore.registry`: `Registry` is a thread-safe record of the exchanges,
  queues and bindings that were declared and deleted. Binding to a queue or
  exchange that was never declared records it as undeclared.
  `exchanges_topology()` and `queues_topology(exclusive)` return copies.
- `amqpcore.publisher_confirm`: `Confirmation` is an ack, a nack or "not
  requested", and an ack or nack may carry a returned message.
  `PublisherConfirm` wraps a `concurrent.futures.Future` or an asyncio
  future and can be awaited.
- `amqpcore.returned_messages`: `ReturnedMessages` builds each
  `ReturnedMessage` from its header and body frames. Messages returned in
  confirm mode are handed out one at a time by `get_waiting_message()`.
  Other returned messages, and those carried by released confirms, are
  collected by `drain()`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

Saving a registry's topology as JSON and loading it again:

```python
import json

from amqpcore.registry import Registry
from amqpcore.topology import TopologyDefinition

registry = Registry()
registry.register_exchange("logs", "fanout", {"durable": True}, {})
registry.register_queue("jobs", {"durable": True, "exclusive": False}, {})
registry.register_queue_binding("jobs", "logs", "", {})

topology = TopologyDefinition(
    exchanges=registry.exchanges_topology(),
    queues=[q.to_definition() for q in registry.queues_topology(False)],
)
saved = json.dumps(topology.to_dict())
restored = TopologyDefinition.from_dict(json.loads(saved))
assert restored == topology
```

Awaiting a publisher confirm:

```python
import asyncio

from amqpcore.publisher_confirm import Confirmation, PublisherConfirm
from amqpcore.returned_messages import ReturnedMessages


async def main():
    returned = ReturnedMessages()
    confirm = PublisherConfirm.not_requested(returned)
    result = await confirm
    assert result == Confirmation.not_requested()


asyncio.run(main())
```

A `PublisherConfirm` can be released (`release()`, or garbage collection)
before it has been awaited to completion. Its future then goes to its
`ReturnedMessages`. If the future has already finished, any message it
carries is stored right away. If it is still pending, it is kept, and its
message shows up in a later `drain()` once it has finished.

## What this package does not do

This package contains no connection, no channel and no frame encoder or
decoder, and it never opens a network socket. It does not talk to a broker.
It only supplies the bookkeeping and state pieces that such a client is
built from. `SocketState` tracks readiness that is reported to it; it does
not watch any socket itself.