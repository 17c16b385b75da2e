"""
Package Serializers
===================

JSON shapes of the entities written to the ``data/*.json`` files of a
configuration package. Keys are camelCase and dates ISO 8601 strings.
"""
from typing import Any, Dict

from sitecms.domain.models.activity import Activity, ReminderSettings, RequiredFieldsConfig
from sitecms.domain.models.availability import Availability, AvailabilityException, WeeklySlot
from sitecms.domain.models.menu_item import MenuItem, slugify
from sitecms.domain.models.page_content import PageContent
from sitecms.domain.models.product import Category, Product
from sitecms.domain.models.social_network import SocialNetwork
from sitecms.domain.models.website_setting import WebsiteSetting
from sitecms.utils.datetime_utils import now, parse_iso, to_iso


def _date(value: Any):
    return parse_iso(value) if isinstance(value, str) else None


def menu_item_to_json(item: MenuItem) -> Dict[str, Any]:
    return {
        "id": item.id,
        "text": item.text,
        "url": item.url,
        "position": item.position,
        "createdAt": to_iso(item.created_at),
        "updatedAt": to_iso(item.updated_at),
    }


def menu_item_from_json(data: Dict[str, Any]) -> MenuItem:
    """A menu item exported without URL gets one built from its text."""
    return MenuItem(
        id=data["id"],
        text=data.get("text"),
        url=data.get("url") or slugify(data.get("text") or ""),
        position=int(data.get("position", 0)),
        created_at=_date(data.get("createdAt")) or now(),
        updated_at=_date(data.get("updatedAt")) or now(),
    )


def page_content_to_json(page: PageContent) -> Dict[str, Any]:
    return {
        "id": page.id,
        "menuItemId": page.menu_item_id,
        "content": page.content,
        "createdAt": to_iso(page.created_at),
        "updatedAt": to_iso(page.updated_at),
    }


def page_content_from_json(data: Dict[str, Any]) -> PageContent:
    return PageContent(
        id=data["id"],
        menu_item_id=data.get("menuItemId"),
        content=data.get("content"),
        created_at=_date(data.get("createdAt")) or now(),
        updated_at=_date(data.get("updatedAt")) or now(),
    )


def setting_to_json(setting: WebsiteSetting) -> Dict[str, Any]:
    return {"key": setting.key, "value": setting.value}


def social_network_to_json(network: SocialNetwork) -> Dict[str, Any]:
    return network.to_dict()


def social_network_from_json(data: Dict[str, Any]) -> SocialNetwork:
    return SocialNetwork(
        type=data.get("type"),
        url=data.get("url", ""),
        label=data.get("label", ""),
        enabled=bool(data.get("enabled", False)),
    )


def category_to_json(category: Category) -> Dict[str, Any]:
    return {
        "id": category.id,
        "name": category.name,
        "description": category.description,
        "displayOrder": category.display_order,
        "createdAt": to_iso(category.created_at),
        "updatedAt": to_iso(category.updated_at),
    }


def category_from_json(data: Dict[str, Any]) -> Category:
    return Category(
        id=data["id"],
        name=data.get("name"),
        description=data.get("description"),
        display_order=int(data.get("displayOrder", 0)),
        created_at=_date(data.get("createdAt")) or now(),
        updated_at=_date(data.get("updatedAt")) or now(),
    )


def product_to_json(product: Product) -> Dict[str, Any]:
    return {
        "id": product.id,
        "name": product.name,
        "price": product.price,
        "description": product.description,
        "imageUrl": product.image_url,
        "displayOrder": product.display_order,
        "categoryIds": list(product.category_ids),
        "createdAt": to_iso(product.created_at),
        "updatedAt": to_iso(product.updated_at),
    }


def product_from_json(data: Dict[str, Any]) -> Product:
    return Product(
        id=data["id"],
        name=data.get("name"),
        price=data.get("price"),
        description=data.get("description"),
        image_url=data.get("imageUrl"),
        display_order=int(data.get("displayOrder", 0)),
        category_ids=list(data.get("categoryIds") or []),
        created_at=_date(data.get("createdAt")) or now(),
        updated_at=_date(data.get("updatedAt")) or now(),
    )


def activity_to_json(activity: Activity) -> Dict[str, Any]:
    return {
        "id": activity.id,
        "name": activity.name,
        "durationMinutes": activity.duration_minutes,
        "color": activity.color,
        "price": activity.price,
        "description": activity.description,
        "requiredFields": activity.required_fields.to_dict(),
        "reminderSettings": activity.reminder_settings.to_dict(),
        "minimumBookingNoticeHours": activity.minimum_booking_notice_hours,
        "createdAt": to_iso(activity.created_at),
        "updatedAt": to_iso(activity.updated_at),
    }


def activity_from_json(data: Dict[str, Any]) -> Activity:
    return Activity(
        id=data["id"],
        name=data.get("name"),
        duration_minutes=int(data.get("durationMinutes", 0)),
        color=data.get("color"),
        price=data.get("price", 0.0),
        description=data.get("description"),
        required_fields=RequiredFieldsConfig.from_dict(data.get("requiredFields")),
        reminder_settings=ReminderSettings.from_dict(data.get("reminderSettings")),
        minimum_booking_notice_hours=int(data.get("minimumBookingNoticeHours", 0)),
        created_at=_date(data.get("createdAt")) or now(),
        updated_at=_date(data.get("updatedAt")) or now(),
    )


def availability_to_json(availability: Availability) -> Dict[str, Any]:
    return {
        "weeklySlots": [slot.to_dict() for slot in availability.weekly_slots],
        "exceptions": [exception.to_dict() for exception in availability.exceptions],
        "updatedAt": to_iso(availability.updated_at),
    }


def availability_from_json(data: Dict[str, Any]) -> Availability:
    return Availability(
        weekly_slots=[WeeklySlot.from_dict(slot) for slot in data.get("weeklySlots") or []],
        exceptions=[AvailabilityException.from_dict(ex) for ex in data.get("exceptions") or []],
        updated_at=_date(data.get("updatedAt")) or now(),
    )
