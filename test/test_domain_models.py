"""Unit tests for domain validation rules.

Tests cover:
- Cart items and quantity clamping
- Orders, French phone numbers and status transitions
- Appointment status transitions and versioning
- Menu items, social networks and products
"""
from datetime import datetime, timezone

import pytest

from sitecms.domain.models.activity import Activity, ReminderSettings, RequiredFieldsConfig
from sitecms.domain.models.appointment import Appointment, AppointmentStatus, ClientInfo
from sitecms.domain.models.cart import CartItem
from sitecms.domain.models.menu_item import MenuItem, slugify
from sitecms.domain.models.order import Order, OrderItem, OrderStatus, is_valid_french_phone
from sitecms.domain.models.product import Product, ProductListConfig, sort_products
from sitecms.domain.models.social_network import SocialNetwork, SocialNetworkType


def make_order(**overrides):
    fields = dict(
        customer_first_name="Marie",
        customer_last_name="Dupont",
        customer_email="Marie.Dupont@Example.com",
        customer_phone="06 12 34 56 78",
        items=[OrderItem("p1", "Candle", 2, 12.5), OrderItem("p2", "Soap", 1, 4.99)],
    )
    fields.update(overrides)
    return Order(**fields)


def make_appointment():
    return Appointment(
        activity_id="a1",
        activity_name="Massage",
        activity_duration_minutes=60,
        client_info=ClientInfo(name="Marie", email="marie@example.com"),
        date_time=datetime(2030, 3, 4, 10, 0, tzinfo=timezone.utc),
    )


# =============================================================================
# Cart
# =============================================================================


class TestCartItem:
    def test_quantity_range(self):
        assert CartItem("p1", 1).quantity == 1
        assert CartItem("p1", 99).quantity == 99
        with pytest.raises(ValueError):
            CartItem("p1", 0)
        with pytest.raises(ValueError):
            CartItem("p1", 100)

    def test_product_id_required(self):
        with pytest.raises(ValueError):
            CartItem("  ", 1)

    def test_with_quantity_clamps(self):
        item = CartItem("p1", 5)
        assert item.with_quantity(250).quantity == 99
        assert item.with_quantity(-3).quantity == 1

    def test_increment_and_decrement(self):
        item = CartItem("p1", 1)
        assert item.increment().quantity == 2
        assert item.decrement() is None
        assert CartItem("p1", 99).increment().quantity == 99

    def test_from_json_rejects_invalid_payloads(self):
        assert CartItem.from_json({"productId": "p1", "quantity": 3}) == CartItem("p1", 3)
        assert CartItem.from_json({"productId": "p1", "quantity": "3"}) is None
        assert CartItem.from_json("not a dict") is None


# =============================================================================
# Orders
# =============================================================================


class TestOrder:
    def test_email_is_lowercased_and_total_rounded(self):
        order = make_order()
        assert order.customer_email == "marie.dupont@example.com"
        assert order.total_price == 29.99
        assert order.status == OrderStatus.NEW

    @pytest.mark.parametrize("phone", ["0612345678", "06.12.34.56.78", "+33 6 12 34 56 78", "01-23-45-67-89"])
    def test_valid_french_phones(self, phone):
        assert is_valid_french_phone(phone)

    @pytest.mark.parametrize("phone", ["0012345678", "061234567", "+44612345678", "phone"])
    def test_invalid_french_phones(self, phone):
        assert not is_valid_french_phone(phone)
        with pytest.raises(ValueError):
            make_order(customer_phone=phone)

    def test_order_requires_items_and_names(self):
        with pytest.raises(ValueError):
            make_order(items=[])
        with pytest.raises(ValueError):
            make_order(customer_last_name="   ")
        with pytest.raises(ValueError):
            make_order(customer_email="not-an-email")

    def test_status_transitions(self):
        order = make_order()
        order.change_status(OrderStatus.CONFIRMED)
        order.change_status(OrderStatus.COMPLETED)
        with pytest.raises(ValueError):
            order.change_status(OrderStatus.NEW)

    def test_completed_is_final(self):
        order = make_order()
        order.change_status(OrderStatus.COMPLETED)
        assert not order.can_transition_to(OrderStatus.CONFIRMED)

    def test_status_from_string(self):
        assert OrderStatus.from_string("confirmed") == OrderStatus.CONFIRMED
        with pytest.raises(ValueError):
            OrderStatus.from_string("shipped")


# =============================================================================
# Appointments and activities
# =============================================================================


class TestAppointment:
    def test_confirm_then_cancel_bumps_version(self):
        appointment = make_appointment()
        appointment.confirm()
        assert appointment.status == AppointmentStatus.CONFIRMED
        assert appointment.version == 2
        appointment.cancel()
        assert appointment.version == 3

    def test_cancelled_cannot_be_confirmed(self):
        appointment = make_appointment()
        appointment.cancel()
        with pytest.raises(ValueError):
            appointment.confirm()

    def test_end_date_time_and_overlap(self):
        appointment = make_appointment()
        assert appointment.end_date_time.hour == 11
        assert appointment.overlaps_interval(
            datetime(2030, 3, 4, 10, 30, tzinfo=timezone.utc),
            datetime(2030, 3, 4, 11, 30, tzinfo=timezone.utc),
        )
        assert not appointment.overlaps_interval(
            datetime(2030, 3, 4, 11, 0, tzinfo=timezone.utc),
            datetime(2030, 3, 4, 12, 0, tzinfo=timezone.utc),
        )

    def test_naive_date_time_rejected(self):
        with pytest.raises(ValueError):
            Appointment(
                activity_id="a1",
                activity_name="Massage",
                activity_duration_minutes=60,
                client_info=ClientInfo(name="Marie", email="marie@example.com"),
                date_time=datetime(2030, 3, 4, 10, 0),
            )

    def test_client_required_fields(self):
        client = ClientInfo(name="Marie", email="marie@example.com")
        with pytest.raises(ValueError):
            client.check_required(RequiredFieldsConfig(fields=("name", "email", "phone")))


class TestActivity:
    def test_reminder_hours_range(self):
        assert ReminderSettings(enabled=True, hours_before=168).hours_before == 168
        with pytest.raises(ValueError):
            ReminderSettings(enabled=True, hours_before=0)
        with pytest.raises(ValueError):
            ReminderSettings(enabled=True, hours_before=169)

    def test_update_is_partial(self):
        activity = Activity(name="Massage", duration_minutes=60)
        activity.update({"price": 45.0})
        assert activity.name == "Massage"
        assert activity.price == 45.0

    def test_duration_must_be_positive(self):
        with pytest.raises(ValueError):
            Activity(name="Massage", duration_minutes=0)


# =============================================================================
# Menu, social networks, catalog
# =============================================================================


class TestMenuItem:
    def test_slugify(self):
        assert slugify("Nos Créations") == "/nos-creations"
        assert slugify("!!!") == "/"

    def test_url_rules(self):
        assert MenuItem("Shop", "/shop", 0).url == "/shop"
        assert MenuItem("Blog", "https://blog.example.com", 1).url == "https://blog.example.com"
        with pytest.raises(ValueError):
            MenuItem("Shop", "/Shop", 0)
        with pytest.raises(ValueError):
            MenuItem("Shop", "shop", 0)

    def test_text_limits(self):
        with pytest.raises(ValueError):
            MenuItem("x" * 51, "/x", 0)
        assert MenuItem("  Home  ", "/", 0).text == "Home"

    def test_with_text_revalidates(self):
        item = MenuItem("Home", "/", 0)
        assert item.with_text("Accueil").text == "Accueil"
        with pytest.raises(ValueError):
            item.with_text("")


class TestSocialNetwork:
    def test_url_formats(self):
        SocialNetwork(SocialNetworkType.EMAIL, "mailto:hello@example.com", enabled=True)
        SocialNetwork(SocialNetworkType.PHONE, "tel:+33 6 12 34 56 78", enabled=True)
        with pytest.raises(ValueError):
            SocialNetwork(SocialNetworkType.INSTAGRAM, "instagram.com/shop")
        with pytest.raises(ValueError):
            SocialNetwork(SocialNetworkType.EMAIL, "hello@example.com")

    def test_enabled_network_needs_url(self):
        with pytest.raises(ValueError):
            SocialNetwork(SocialNetworkType.FACEBOOK, "", enabled=True)

    def test_defaults_cover_every_type_disabled(self):
        defaults = SocialNetwork.create_all_defaults()
        assert {network.type for network in defaults} == set(SocialNetworkType)
        assert not any(network.enabled for network in defaults)


class TestProducts:
    def test_price_must_be_positive(self):
        with pytest.raises(ValueError):
            Product(name="Candle", price=0)

    def test_add_category_is_idempotent(self):
        product = Product(name="Candle", price=10)
        product.add_category("c1")
        product.add_category("c1")
        assert product.category_ids == ["c1"]

    def test_list_config_filters_sorts_and_limits(self):
        products = [
            Product(name="B", price=5, display_order=2, category_ids=["c1"]),
            Product(name="A", price=9, display_order=1, category_ids=["c2"]),
            Product(name="C", price=1, display_order=0, category_ids=["c1"]),
        ]
        config = ProductListConfig(category_ids=("c1",), sort_by="price", max_products=1)
        assert [p.name for p in config.apply(products)] == ["C"]

    def test_unknown_sort_falls_back_to_display_order(self):
        products = [Product(name="B", price=5, display_order=2), Product(name="A", price=9, display_order=1)]
        assert [p.name for p in sort_products(products, "bogus")] == ["A", "B"]

    def test_invalid_max_products(self):
        with pytest.raises(ValueError):
            ProductListConfig(max_products=0)
