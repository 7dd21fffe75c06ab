from amqpcore.topology import (
    BindingDefinition,
    ChannelDefinition,
    ConsumerDefinition,
    ExchangeDefinition,
    QueueDefinition,
    TopologyDefinition,
)
from amqpcore.topology_internal import (
    ChannelDefinitionInternal,
    ConsumerDefinitionInternal,
    QueueDefinitionInternal,
    TopologyInternal,
)


def test_declared_queue():
    queue = QueueDefinitionInternal.declared("q", {"durable": True}, {"k": 1})
    assert queue.is_declared()
    assert queue.name == "q"
    assert queue.options == {"durable": True}
    assert queue.arguments == {"k": 1}
    assert queue.bindings == []


def test_undeclared_queue():
    queue = QueueDefinitionInternal.undeclared("q")
    assert not queue.is_declared()
    assert queue.options is None
    assert queue.arguments is None
    assert not queue.is_exclusive()


def test_set_declared():
    queue = QueueDefinitionInternal.undeclared("q")
    queue.set_declared({"exclusive": True}, {})
    assert queue.is_declared()
    assert queue.is_exclusive()
    assert queue.arguments == {}


def test_is_exclusive_depends_on_option():
    assert QueueDefinitionInternal.declared("a", {"exclusive": True}, {}).is_exclusive()
    assert not QueueDefinitionInternal.declared("b", {"exclusive": False}, {}).is_exclusive()
    assert not QueueDefinitionInternal.declared("c", {}, {}).is_exclusive()


def test_register_and_deregister_binding():
    queue = QueueDefinitionInternal.undeclared("q")
    queue.register_binding("ex", "rk", {})
    queue.register_binding("ex", "rk", {"a": 1})
    queue.register_binding("ex", "other", {})
    queue.register_binding("ex", "rk", {})
    queue.deregister_binding("ex", "rk", {})
    assert queue.bindings == [
        BindingDefinition("ex", "rk", {"a": 1}),
        BindingDefinition("ex", "other", {}),
    ]


def test_deregister_unknown_binding_keeps_all():
    queue = QueueDefinitionInternal.undeclared("q")
    queue.register_binding("ex", "rk", {})
    queue.deregister_binding("other", "rk", {})
    assert queue.bindings == [BindingDefinition("ex", "rk", {})]


def test_queue_from_definition_is_declared_and_round_trips():
    definition = QueueDefinition("q", {"durable": True}, {}, [BindingDefinition("s", "r")])
    internal = QueueDefinitionInternal.from_definition(definition)
    assert internal.is_declared()
    assert internal.to_definition() == definition


def test_consumer_from_definition_has_no_original():
    definition = ConsumerDefinition("q", "tag", {"no_ack": True}, {})
    internal = ConsumerDefinitionInternal.from_definition(definition)
    assert internal.original() is None
    assert internal.queue == "q"
    assert internal.tag == "tag"
    assert internal.options == {"no_ack": True}
    assert internal.to_definition() == definition


def test_consumer_original_returns_live_consumer():
    live = object()
    internal = ConsumerDefinitionInternal(ConsumerDefinition("q"), live)
    assert internal.original() is live


def test_channel_round_trip_has_no_channel():
    definition = ChannelDefinition(
        queues=[QueueDefinition("excl", {"exclusive": True}, {})],
        consumers=[ConsumerDefinition("excl", "c")],
    )
    internal = ChannelDefinitionInternal.from_definition(definition)
    assert internal.channel is None
    assert all(q.is_declared() for q in internal.queues)
    assert internal.to_definition() == definition


def test_topology_round_trip():
    definition = TopologyDefinition(
        exchanges=[ExchangeDefinition("ex", "fanout", {}, {})],
        queues=[QueueDefinition("q", {}, {})],
        channels=[ChannelDefinition(consumers=[ConsumerDefinition("q", "t")])],
    )
    internal = TopologyInternal.from_definition(definition)
    assert len(internal.queues) == 1 and internal.queues[0].is_declared()
    assert internal.to_definition() == definition