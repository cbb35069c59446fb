from blockfall.events.bus import EventBus


def test_event_bus_emit_subscribe():
    bus = EventBus()
    received = {}

    def handler(sender, **kwargs):
        received.update(kwargs)

    bus.subscribe("test", handler)
    bus.emit("test", value=42, msg="hello")

    assert received["value"] == 42
    assert received["msg"] == "hello"


def test_event_bus_ignores_events_without_subscribers():
    bus = EventBus()
    calls = []

    bus.subscribe("ping", lambda sender, **kwargs: calls.append(kwargs))
    bus.emit("never_subscribed", n=2)
    assert calls == []
    bus.emit("ping", n=1)
    assert calls == [{"n": 1}]
