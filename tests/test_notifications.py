"""Dispatcher message composition and failure handling over the mock transport."""

import asyncio

import pytest

from cookhouse.exceptions import ErrorKind, NotificationError
from cookhouse.services.notifications import (
    MockMailTransport,
    NotificationDispatcher,
    OrderDetails,
)


@pytest.fixture
def transport():
    return MockMailTransport()


@pytest.fixture
def dispatcher(transport):
    return NotificationDispatcher(
        transport=transport,
        sender="kitchen@cookhouse.test",
        orders_recipient="ops@cookhouse.test",
        timeout=1.0,
    )


def test_registration_welcome(dispatcher, transport):
    result = asyncio.run(dispatcher.send_registration_welcome("john@example.com", "john"))

    assert result.success
    [message] = transport.outbox
    assert message.sender == "kitchen@cookhouse.test"
    assert message.recipient == "john@example.com"
    assert message.subject == "Welcome to Daddy's Cook House"
    assert message.body == (
        "Hello john,\n\nYour registration is successful!\n\nEnjoy our services.\n\nThank you!"
    )


def test_login_alert(dispatcher, transport):
    asyncio.run(dispatcher.send_login_alert("john@example.com", "john"))

    [message] = transport.outbox
    assert message.recipient == "john@example.com"
    assert message.subject == "Login Alert - Daddy's Cook House"
    assert message.body == (
        "Hello john,\n\nYou have successfully logged into Daddy's Cook House.\n\n"
        "If this wasn't you, please contact us immediately."
    )


def test_new_order_alert_goes_to_operations(dispatcher, transport):
    order = OrderDetails(
        name="Jane", email="jane@example.com", phone="555-0100", quantity=3, dish="Paneer Tikka"
    )
    asyncio.run(dispatcher.send_new_order_alert(order))

    [message] = transport.outbox
    assert message.recipient == "ops@cookhouse.test"
    assert message.subject == "New Order - Daddy's Cook House"
    assert message.body == (
        "New Order Details:\nName: Jane\nEmail: jane@example.com\n"
        "Phone: 555-0100\nDish: Paneer Tikka\nQuantity: 3"
    )


def test_restaurant_name_is_configurable(transport):
    dispatcher = NotificationDispatcher(
        transport, "a@b.test", "ops@b.test", restaurant_name="Mummy's Kitchen"
    )
    asyncio.run(dispatcher.send_login_alert("john@example.com", "john"))
    assert transport.outbox[0].subject == "Login Alert - Mummy's Kitchen"


def test_rejected_send_raises(dispatcher, transport):
    transport.fail_all = True
    with pytest.raises(NotificationError) as exc:
        asyncio.run(dispatcher.send_registration_welcome("john@example.com", "john"))
    assert exc.value.kind == ErrorKind.UNKNOWN
    assert transport.outbox == []


def test_slow_transport_is_unavailable(transport):
    slow = MockMailTransport(min_latency=0.5, max_latency=0.5)
    dispatcher = NotificationDispatcher(slow, "a@b.test", "ops@b.test", timeout=0.01)
    with pytest.raises(NotificationError) as exc:
        asyncio.run(dispatcher.send_login_alert("john@example.com", "john"))
    assert exc.value.kind == ErrorKind.UNAVAILABLE


def test_mock_failure_rate():
    always = MockMailTransport(failure_rate=1.0)
    result = asyncio.run(always.send("a@b.test", "c@d.test", "Hi", "Body"))
    assert not result.success
    assert result.error_message == "Simulated email failure"


def test_mock_health_follows_fail_switch(transport):
    assert asyncio.run(transport.health_check())
    transport.fail_all = True
    assert not asyncio.run(transport.health_check())
