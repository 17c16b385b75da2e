"""
Placeholder Replacer
====================

Fills ``{{placeholder}}`` markers of email templates with order or
appointment data. Unknown placeholders are left untouched.
"""
from typing import Callable, Dict, List, NamedTuple

from sitecms.domain.models.appointment import Appointment
from sitecms.domain.models.order import Order
from sitecms.utils.formatting import format_currency, format_date, format_datetime, format_time


class Placeholder(NamedTuple):
    syntax: str
    description: str
    resolver: Callable


def _products_list(order: Order) -> str:
    return "\n".join(
        f"- {item.product_name} x{item.quantity} : {format_currency(item.total)}"
        for item in order.items
    )


ORDER_PLACEHOLDERS: List[Placeholder] = [
    Placeholder("{{order_id}}", "Unique identifier of the order", lambda o: o.id),
    Placeholder("{{order_date}}", "Date and time of the order", lambda o: format_datetime(o.created_at)),
    Placeholder("{{order_total}}", "Total amount of the order", lambda o: format_currency(o.total_price)),
    Placeholder("{{customer_firstname}}", "Customer first name", lambda o: o.customer_first_name),
    Placeholder("{{customer_lastname}}", "Customer last name", lambda o: o.customer_last_name),
    Placeholder("{{customer_email}}", "Customer email address", lambda o: o.customer_email),
    Placeholder("{{customer_phone}}", "Customer phone number", lambda o: o.customer_phone or ""),
    Placeholder("{{products_list}}", "Formatted list of the ordered products", _products_list),
]

APPOINTMENT_PLACEHOLDERS: List[Placeholder] = [
    Placeholder("{{appointment_activity}}", "Name of the booked activity", lambda a: a.activity_name),
    Placeholder("{{appointment_date}}", "Date of the appointment", lambda a: format_date(a.date_time)),
    Placeholder(
        "{{appointment_time}}",
        "Start and end time of the appointment",
        lambda a: f"{format_time(a.date_time)} - {format_time(a.end_date_time)}",
    ),
    Placeholder(
        "{{appointment_duration}}",
        "Duration of the appointment in minutes",
        lambda a: f"{a.activity_duration_minutes} minutes",
    ),
    Placeholder("{{customer_name}}", "Client full name", lambda a: a.client_info.name),
    Placeholder("{{customer_email}}", "Client email address", lambda a: a.client_info.email),
    Placeholder("{{customer_phone}}", "Client phone number", lambda a: a.client_info.phone or "Not provided"),
    Placeholder("{{customer_notes}}", "Notes left by the client", lambda a: a.client_info.notes or ""),
]


def _replace(template: str, placeholders: List[Placeholder], subject) -> str:
    result = template
    for placeholder in placeholders:
        if placeholder.syntax in result:
            result = result.replace(placeholder.syntax, str(placeholder.resolver(subject)))
    return result


class PlaceholderReplacer:
    """Replaces template placeholders with order or appointment values."""

    def replace_order_placeholders(self, template: str, order: Order) -> str:
        return _replace(template, ORDER_PLACEHOLDERS, order)

    def replace_appointment_placeholders(self, template: str, appointment: Appointment) -> str:
        return _replace(template, APPOINTMENT_PLACEHOLDERS, appointment)

    def get_order_placeholders(self) -> List[Dict[str, str]]:
        return [{"syntax": p.syntax, "description": p.description} for p in ORDER_PLACEHOLDERS]

    def get_appointment_placeholders(self) -> List[Dict[str, str]]:
        return [{"syntax": p.syntax, "description": p.description} for p in APPOINTMENT_PLACEHOLDERS]
