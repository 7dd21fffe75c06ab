import threading

from amqpcore.registry import Registry
from amqpcore.topology import BindingDefinition, ExchangeDefinition


def test_empty_registry():
    registry = Registry()
    assert registry.exchanges_topology() == []
    assert registry.queues_topology(False) == []
    assert registry.queues_topology(True) == []


def test_register_exchange():
    registry = Registry()
    registry.register_exchange("ex", "direct", {"durable": True}, {})
    assert registry.exchanges_topology() == [
        ExchangeDefinition("ex", "direct", {"durable": True}, {}, [])
    ]


def test_register_exchange_again_updates_and_keeps_bindings():
    registry = Registry()
    registry.register_exchange_binding("ex", "src", "rk", {})
    [placeholder] = registry.exchanges_topology()
    assert placeholder.kind is None and placeholder.options is None
    registry.register_exchange("ex", "topic", {}, {"a": 1})
    [exchange] = registry.exchanges_topology()
    assert exchange.kind == "topic"
    assert exchange.arguments == {"a": 1}
    assert exchange.bindings == [BindingDefinition("src", "rk", {})]


def test_deregister_exchange():
    registry = Registry()
    registry.register_exchange("ex", "direct", {}, {})
    registry.deregister_exchange("ex")
    registry.deregister_exchange("missing")
    assert registry.exchanges_topology() == []


def test_deregister_exchange_binding_matches_all_fields():
    registry = Registry()
    registry.register_exchange_binding("ex", "src", "rk", {})
    registry.register_exchange_binding("ex", "src", "rk", {"x": 1})
    registry.deregister_exchange_binding("ex", "src", "rk", {})
    registry.deregister_exchange_binding("missing", "src", "rk", {})
    [exchange] = registry.exchanges_topology()
    assert exchange.bindings == [BindingDefinition("src", "rk", {"x": 1})]


def test_queues_topology_filters_by_exclusivity():
    registry = Registry()
    registry.register_queue("shared", {"durable": True}, {})
    registry.register_queue("mine", {"exclusive": True}, {})
    assert [q.name for q in registry.queues_topology(False)] == ["shared"]
    assert [q.name for q in registry.queues_topology(True)] == ["mine"]


def test_queue_binding_before_declare_creates_undeclared():
    registry = Registry()
    registry.register_queue_binding("q", "ex", "rk", {})
    [queue] = registry.queues_topology(False)
    assert not queue.is_declared()
    registry.register_queue("q", {"durable": True}, {})
    [queue] = registry.queues_topology(False)
    assert queue.is_declared()
    assert queue.bindings == [BindingDefinition("ex", "rk", {})]


def test_deregister_queue_binding_and_queue():
    registry = Registry()
    registry.register_queue("q", {}, {})
    registry.register_queue_binding("q", "ex", "rk", {})
    registry.register_queue_binding("q", "ex", "other", {})
    registry.deregister_queue_binding("q", "ex", "rk", {})
    registry.deregister_queue_binding("missing", "ex", "rk", {})
    [queue] = registry.queues_topology(False)
    assert queue.bindings == [BindingDefinition("ex", "other", {})]
    registry.deregister_queue("q")
    assert registry.queues_topology(False) == []


def test_returned_topology_is_a_copy():
    registry = Registry()
    registry.register_exchange("ex", "direct", {}, {})
    registry.register_queue("q", {}, {})
    registry.exchanges_topology()[0].bindings.append(BindingDefinition("s", "r"))
    registry.queues_topology(False)[0].register_binding("s", "r", {})
    assert registry.exchanges_topology()[0].bindings == []
    assert registry.queues_topology(False)[0].bindings == []


def test_concurrent_bindings_are_all_recorded():
    registry = Registry()

    def worker(n):
        for i in range(50):
            registry.register_queue_binding("q", f"ex{n}", str(i), {})

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    [queue] = registry.queues_topology(False)
    assert len(queue.bindings) == 200