"""Tests for email placeholders and French formatting helpers."""
from datetime import datetime, timezone

import pytest

from sitecms.domain.models.appointment import Appointment, ClientInfo
from sitecms.domain.models.order import Order, OrderItem
from sitecms.infrastructure.email.placeholder_replacer import PlaceholderReplacer
from sitecms.utils.formatting import format_currency, format_date, format_time


@pytest.fixture
def replacer():
    return PlaceholderReplacer()


@pytest.fixture
def order():
    order = Order(
        customer_first_name="Marie",
        customer_last_name="Dupont",
        customer_email="marie@example.com",
        customer_phone="0612345678",
        items=[OrderItem("p1", "Candle", 2, 12.5), OrderItem("p2", "Soap", 1, 4.99)],
    )
    order.created_at = datetime(2026, 3, 4, 15, 30, tzinfo=timezone.utc)
    return order


@pytest.fixture
def appointment():
    return Appointment(
        activity_id="a1",
        activity_name="Massage",
        activity_duration_minutes=45,
        client_info=ClientInfo(name="Marie Dupont", email="marie@example.com"),
        date_time=datetime(2026, 3, 9, 10, 0, tzinfo=timezone.utc),
    )


@pytest.mark.parametrize("amount, expected", [
    (29.99, "29,99 €"),
    (0, "0,00 €"),
    (1234.5, "1 234,50 €"),
    (1234567.891, "1 234 567,89 €"),
])
def test_format_currency(amount, expected):
    assert format_currency(amount) == expected


def test_date_and_time_formats():
    moment = datetime(2026, 3, 9, 8, 5, tzinfo=timezone.utc)
    assert format_date(moment) == "09/03/2026"
    assert format_time(moment) == "08:05"


def test_order_placeholders(replacer, order):
    text = replacer.replace_order_placeholders(
        "Order {{order_id}} from {{customer_firstname}} {{customer_lastname}}: {{order_total}} on {{order_date}}",
        order,
    )
    assert text == f"Order {order.id} from Marie Dupont: 29,99 € on 04/03/2026 15:30"


def test_products_list(replacer, order):
    text = replacer.replace_order_placeholders("{{products_list}}", order)
    assert text.splitlines() == ["- Candle x2 : 25,00 €", "- Soap x1 : 4,99 €"]


def test_unknown_placeholders_are_kept(replacer, order):
    assert replacer.replace_order_placeholders("Hi {{nickname}}", order) == "Hi {{nickname}}"


def test_appointment_placeholders(replacer, appointment):
    text = replacer.replace_appointment_placeholders(
        "{{appointment_activity}} on {{appointment_date}}, {{appointment_time}} "
        "({{appointment_duration}}) phone: {{customer_phone}}",
        appointment,
    )
    assert text == "Massage on 09/03/2026, 10:00 - 10:45 (45 minutes) phone: Not provided"


def test_placeholder_listings(replacer):
    order_syntaxes = [p["syntax"] for p in replacer.get_order_placeholders()]
    appointment_syntaxes = [p["syntax"] for p in replacer.get_appointment_placeholders()]
    assert "{{products_list}}" in order_syntaxes
    assert "{{appointment_time}}" in appointment_syntaxes
    assert all(p["description"] for p in replacer.get_appointment_placeholders())
