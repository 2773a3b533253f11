"""Tests for MessageBus."""

from datetime import datetime, timezone

from pra_core.models import AgentMessage, MessageContent, MessageType


class Recorder:
    """Receiver that records delivered messages."""

    def __init__(self):
        self.received: list[AgentMessage] = []

    def receive_message(self, message: AgentMessage) -> None:
        self.received.append(message)


class Exploding:
    """Receiver that always fails."""

    def receive_message(self, message: AgentMessage) -> None:
        raise RuntimeError("boom")


def make_message(sender: str, to: str, topic: str = "TEST", msg_id: str = "m1") -> AgentMessage:
    return AgentMessage(
        id=msg_id,
        sender=sender,
        to=to,
        type=MessageType.BROADCAST if to == "ALL" else MessageType.REQUEST,
        content=MessageContent(topic=topic, data={"value": 1}),
        timestamp=datetime.now(timezone.utc),
    )


class TestMessageBusSubscribe:
    """Tests for subscription management."""

    def test_subscribe(self, message_bus):
        """Test subscribing a receiver."""
        message_bus.subscribe("a", Recorder())
        assert message_bus.is_subscribed("a")

    def test_unsubscribe(self, message_bus):
        """Test unsubscribing a receiver."""
        message_bus.subscribe("a", Recorder())
        message_bus.unsubscribe("a")
        assert not message_bus.is_subscribed("a")

    def test_unsubscribe_unknown_is_ignored(self, message_bus):
        """Test unsubscribing an unknown id does not raise."""
        message_bus.unsubscribe("missing")


class TestMessageBusSend:
    """Tests for delivery."""

    def test_direct_message(self, message_bus):
        """Test that a direct message reaches only its recipient."""
        a, b = Recorder(), Recorder()
        message_bus.subscribe("a", a)
        message_bus.subscribe("b", b)

        message_bus.send(make_message("a", "b"))

        assert len(b.received) == 1
        assert a.received == []

    def test_broadcast_skips_sender(self, message_bus):
        """Test that a broadcast reaches every subscriber except the sender, once each."""
        a, b, c = Recorder(), Recorder(), Recorder()
        message_bus.subscribe("a", a)
        message_bus.subscribe("b", b)
        message_bus.subscribe("c", c)

        message_bus.send(make_message("a", "ALL"))

        assert a.received == []
        assert len(b.received) == 1
        assert len(c.received) == 1

    def test_unknown_recipient_is_dropped(self, message_bus):
        """Test that a message to an unsubscribed id is recorded but not delivered."""
        a = Recorder()
        message_bus.subscribe("a", a)

        message_bus.send(make_message("a", "ghost"))

        assert a.received == []
        assert len(message_bus.get_messages()) == 1

    def test_failing_receiver_does_not_block_others(self, message_bus):
        """Test that a receiver error is isolated from other recipients and the sender."""
        b = Recorder()
        message_bus.subscribe("x", Exploding())
        message_bus.subscribe("b", b)

        message_bus.send(make_message("a", "ALL"))

        assert len(b.received) == 1

    def test_messages_recorded_in_send_order(self, message_bus):
        """Test audit queue order."""
        message_bus.send(make_message("a", "ALL", msg_id="1"))
        message_bus.send(make_message("b", "ALL", msg_id="2"))

        assert [m.id for m in message_bus.get_messages()] == ["1", "2"]


class TestMessageBusAudit:
    """Tests for the audit queue."""

    def test_get_messages_returns_snapshot(self, message_bus):
        """Test that mutating the returned list leaves the queue alone."""
        message_bus.send(make_message("a", "ALL"))

        snapshot = message_bus.get_messages()
        snapshot.clear()

        assert len(message_bus.get_messages()) == 1

    def test_clear_messages_keeps_subscriptions(self, message_bus):
        """Test that clearing the queue keeps subscribers."""
        b = Recorder()
        message_bus.subscribe("b", b)
        message_bus.send(make_message("a", "ALL"))

        message_bus.clear_messages()

        assert message_bus.get_messages() == []
        assert message_bus.is_subscribed("b")
        message_bus.send(make_message("a", "ALL", msg_id="m2"))
        assert len(b.received) == 2
