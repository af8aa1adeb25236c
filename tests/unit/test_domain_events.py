"""Unit tests for the event bus."""

from __future__ import annotations

from skirmish.domain import events as ev


def test_publish_delivers_in_order():
    bus = ev.EventBus()
    log = ev.EventLog()
    bus.subscribe(log)

    bus.publish(ev.message("first"))
    bus.publish(ev.state_changed({"game_over": False}))
    bus.publish(ev.message("second"))

    assert [e.type for e in log.events] == [ev.MESSAGE, ev.STATE_CHANGED, ev.MESSAGE]
    assert log.messages() == ["first", "second"]


def test_each_listener_receives_event_once():
    bus = ev.EventBus()
    received: list[tuple[str, str]] = []
    bus.subscribe(lambda event: received.append(("a", event.payload["text"])))
    bus.subscribe(lambda event: received.append(("b", event.payload["text"])))

    bus.publish(ev.message("hello"))

    assert received == [("a", "hello"), ("b", "hello")]


def test_unsubscribe_stops_delivery():
    bus = ev.EventBus()
    log = ev.EventLog()
    unsubscribe = bus.subscribe(log)

    bus.publish(ev.message("kept"))
    unsubscribe()
    unsubscribe()
    bus.publish(ev.message("dropped"))

    assert log.messages() == ["kept"]


def test_failing_listener_does_not_block_others(caplog):
    bus = ev.EventBus()
    log = ev.EventLog()

    def broken(event: ev.GameEvent) -> None:
        raise RuntimeError("boom")

    bus.subscribe(broken)
    bus.subscribe(log)

    bus.publish(ev.message("still delivered"))

    assert log.messages() == ["still delivered"]
    assert "failed on message event" in caplog.text


def test_event_log_since():
    log = ev.EventLog()
    for text in ("a", "b", "c"):
        log(ev.message(text))

    assert [e.payload["text"] for e in log.since(1)] == ["b", "c"]
    assert log.since(10) == []
    assert len(log) == 3


def test_bounded_event_log_keeps_absolute_indices():
    log = ev.EventLog(max_events=2)
    for text in ("a", "b", "c", "d"):
        log(ev.message(text))

    assert len(log) == 4
    assert log.first_index == 2
    assert log.messages() == ["c", "d"]
    assert [(i, e.payload["text"]) for i, e in log.indexed(0)] == [(2, "c"), (3, "d")]
    assert [(i, e.payload["text"]) for i, e in log.indexed(3)] == [(3, "d")]
    assert log.since(4) == []


def test_event_factories():
    attack = ev.attack_resolved("1-1", "1-2", "player", 3, 2, True)
    transfer = ev.transfer_resolved("1-1", "0-1", "ai", 4)

    assert attack.to_dict() == {
        "type": "attack_resolved",
        "payload": {
            "attacker_id": "1-1",
            "defender_id": "1-2",
            "side": "player",
            "attack_strength": 3,
            "defense_strength": 2,
            "captured": True,
        },
    }
    assert transfer.payload["moved"] == 4
