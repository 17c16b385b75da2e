"""HTTP tests for the admin and public API."""
from datetime import datetime, time, timedelta, timezone

import pytest

from sitecms.domain.constants.setting_keys import SettingKeys
from sitecms.domain.models.email import EmailLog, EmailLogStatus, EmailTemplateType
from sitecms.domain.repositories.email_repository import EmailLogRepository
from sitecms.domain.repositories.settings_repository import WebsiteSettingsRepository
from sitecms.infrastructure.storage.file_storage import FileStorage, StorageFolders

ADMIN = "/api/v1/admin"
PUBLIC = "/api/v1/public"


# =============================================================================
# Service endpoints and authentication
# =============================================================================


def test_root(client):
    body = client.get("/").json()
    assert body["status"] == "running"
    assert body["docs"] == "/docs"


def test_health(client, mongo_client, monkeypatch):
    monkeypatch.setattr(mongo_client, "ping", lambda: True)
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "database": True}

    monkeypatch.setattr(mongo_client, "ping", lambda: False)
    response = client.get("/health")
    assert response.status_code == 503
    assert response.json()["status"] == "degraded"


class TestAuth:
    @pytest.mark.parametrize("path", [
        "/settings",
        "/menu",
        "/products",
        "/orders",
        "/appointments/calendar",
        "/email/smtp",
        "/email/logs",
        "/config/summary",
    ])
    def test_admin_routes_need_a_session(self, client, path):
        assert client.get(ADMIN + path).status_code == 401

    def test_wrong_password(self, client):
        response = client.post("/api/v1/auth/login", json={"password": "nope"})
        assert response.status_code == 401
        assert client.get("/api/v1/auth/session").json() == {"authenticated": False}

    def test_login_then_logout(self, admin_client):
        assert admin_client.get("/api/v1/auth/session").json() == {"authenticated": True}
        assert admin_client.get(ADMIN + "/settings").status_code == 200

        admin_client.post("/api/v1/auth/logout")

        assert admin_client.get(ADMIN + "/settings").status_code == 401

    def test_tampered_cookie(self, client):
        client.cookies.set("sitecms_session", "forged.value.signature")
        assert client.get(ADMIN + "/settings").status_code == 401

    def test_client_logs_accepted_without_session(self, client):
        response = client.post("/api/v1/logs", json={"level": "error", "message": "checkout failed"})
        assert response.status_code == 202


# =============================================================================
# Settings
# =============================================================================


class TestSettings:
    def test_defaults(self, admin_client):
        settings = admin_client.get(ADMIN + "/settings").json()
        assert settings[SettingKeys.WEBSITE_NAME] == "Shower"
        assert settings[SettingKeys.SELLING_ENABLED] == "false"

    def test_update_and_read(self, admin_client):
        response = admin_client.put(ADMIN + "/settings/website-name", json={"value": "  Atelier  "})
        assert response.status_code == 200
        assert response.json()["value"] == "Atelier"
        assert admin_client.get(ADMIN + "/settings/website-name").json()["value"] == "Atelier"
        assert admin_client.get(PUBLIC + "/settings").json()["website_name"] == "Atelier"

    def test_invalid_value(self, admin_client):
        response = admin_client.put(ADMIN + "/settings/theme-color", json={"value": "Magenta!"})
        assert response.status_code == 400

    def test_unknown_key(self, admin_client):
        assert admin_client.get(ADMIN + "/settings/favourite-animal").status_code == 404
        assert admin_client.put(ADMIN + "/settings/favourite-animal", json={"value": "cat"}).status_code == 400

    def test_email_settings_stay_private(self, admin_client):
        admin_client.put(ADMIN + "/email/smtp", json={
            "host": "smtp.example.com",
            "port": 587,
            "username": "shop@example.com",
            "password": "secret",
            "encryption": "tls",
        })

        assert not any(key.startswith("email-") for key in admin_client.get(ADMIN + "/settings").json())
        smtp = admin_client.get(ADMIN + "/email/smtp").json()
        assert smtp["password"] == "********"
        assert "secret" not in admin_client.get(PUBLIC + "/settings").text

    def test_email_logs_newest_first(self, container, admin_client):
        logs = container.get(EmailLogRepository)
        for minutes, recipient in [(30, "old@example.com"), (10, "new@example.com"), (20, "mid@example.com")]:
            logs.create(EmailLog(
                reference_id="order-1",
                template_type=EmailTemplateType.PURCHASER,
                recipient=recipient,
                subject="Order",
                status=EmailLogStatus.SENT,
                sent_at=datetime.now(timezone.utc) - timedelta(minutes=minutes),
            ))

        response = admin_client.get(ADMIN + "/email/logs", params={"limit": 2})

        assert response.status_code == 200
        assert [log["recipient"] for log in response.json()] == ["new@example.com", "mid@example.com"]
        assert response.json()[0]["status"] == "sent"
        assert admin_client.get(ADMIN + "/email/logs", params={"limit": 0}).status_code == 422


# =============================================================================
# Menu and pages
# =============================================================================


class TestMenu:
    def test_crud(self, admin_client):
        created = admin_client.post(ADMIN + "/menu", json={"text": "Nos Créations"})
        assert created.status_code == 201
        item = created.json()
        assert item["url"] == "/nos-creations"
        assert item["position"] == 0

        updated = admin_client.put(ADMIN + f"/menu/{item['id']}", json={"text": "Créations"})
        assert updated.json()["text"] == "Créations"

        assert admin_client.delete(ADMIN + f"/menu/{item['id']}").status_code == 200
        assert admin_client.get(ADMIN + "/menu").json() == []

    def test_invalid_url(self, admin_client):
        assert admin_client.post(ADMIN + "/menu", json={"text": "Shop", "url": "shop"}).status_code == 400

    def test_unknown_item(self, admin_client):
        assert admin_client.put(ADMIN + "/menu/missing", json={"text": "x"}).status_code == 404
        assert admin_client.delete(ADMIN + "/menu/missing").status_code == 404

    def test_reorder(self, admin_client):
        first = admin_client.post(ADMIN + "/menu", json={"text": "Home", "url": "/"}).json()
        second = admin_client.post(ADMIN + "/menu", json={"text": "Shop"}).json()

        response = admin_client.put(ADMIN + "/menu/reorder", json={"ordered_ids": [second["id"], first["id"]]})

        assert [item["text"] for item in response.json()] == ["Shop", "Home"]
        assert [item["text"] for item in admin_client.get(PUBLIC + "/menu").json()] == ["Shop", "Home"]

    def test_page_content_is_sanitized(self, admin_client):
        item = admin_client.post(ADMIN + "/menu", json={"text": "About"}).json()

        response = admin_client.put(
            ADMIN + f"/pages/{item['id']}",
            json={"content": '<p onclick="x()">Hi</p><div class="callout-block" data-variant="tip"><p>Tip</p></div>'},
        )

        assert response.status_code == 200
        page = response.json()
        assert "onclick" not in page["content"]
        assert [block["type"] for block in page["blocks"]] == ["callout"]
        assert admin_client.get(PUBLIC + f"/pages/{item['id']}").status_code == 200

    def test_missing_page(self, admin_client):
        assert admin_client.get(PUBLIC + "/pages/missing").status_code == 404


# =============================================================================
# Catalog and orders
# =============================================================================


@pytest.fixture
def product(admin_client):
    category = admin_client.post(ADMIN + "/categories", json={"name": "Candles"}).json()
    response = admin_client.post(
        ADMIN + "/products",
        json={"name": "Vanilla candle", "price": 12.5, "category_ids": [category["id"]]},
    )
    assert response.status_code == 201
    return response.json()


def checkout(client, product_id, quantity=2, phone="06 12 34 56 78"):
    return client.post(PUBLIC + "/orders", json={
        "first_name": "Marie",
        "last_name": "Dupont",
        "email": "Marie@Example.com",
        "phone": phone,
        "items": [{"product_id": product_id, "quantity": quantity}],
    })


class TestCatalog:
    def test_public_listing(self, admin_client, product):
        products = admin_client.get(PUBLIC + "/products").json()
        assert [p["name"] for p in products] == ["Vanilla candle"]
        assert admin_client.get(PUBLIC + "/products", params={"category_ids": "other"}).json() == []

    def test_price_must_be_positive(self, admin_client):
        assert admin_client.post(ADMIN + "/products", json={"name": "Free", "price": 0}).status_code == 400

    def test_unknown_product(self, admin_client):
        assert admin_client.get(ADMIN + "/products/missing").status_code == 404

    def test_reorder_products(self, admin_client, product):
        other = admin_client.post(ADMIN + "/products", json={"name": "Amber candle", "price": 9}).json()

        response = admin_client.put(ADMIN + "/products/reorder", json={"ordered_ids": [other["id"], product["id"]]})

        assert response.status_code == 200
        assert [(p["name"], p["display_order"]) for p in response.json()] == [("Amber candle", 0), ("Vanilla candle", 1)]

    def test_reorder_categories(self, admin_client, product):
        candles = admin_client.get(ADMIN + "/categories").json()[0]
        soaps = admin_client.post(ADMIN + "/categories", json={"name": "Soaps"}).json()

        response = admin_client.put(ADMIN + "/categories/reorder", json={"ordered_ids": [soaps["id"], candles["id"]]})

        assert response.status_code == 200
        assert [c["name"] for c in response.json()] == ["Soaps", "Candles"]
        assert [c["name"] for c in admin_client.get(ADMIN + "/categories").json()] == ["Soaps", "Candles"]

    @pytest.mark.parametrize("ordered_ids", [[], ["missing"], "duplicate"])
    def test_reorder_must_list_every_product_once(self, admin_client, product, ordered_ids):
        if ordered_ids == "duplicate":
            ordered_ids = [product["id"], product["id"]]
        response = admin_client.put(ADMIN + "/products/reorder", json={"ordered_ids": ordered_ids})
        assert response.status_code == 400
        assert admin_client.get(ADMIN + "/products/" + product["id"]).json()["display_order"] == 0


class TestOrders:
    def test_checkout_refused_while_selling_disabled(self, admin_client, product):
        response = checkout(admin_client, product["id"])
        assert response.status_code == 400
        assert "disabled" in response.json()["detail"]

    def test_checkout_and_status_changes(self, admin_client, product):
        admin_client.put(ADMIN + "/settings/selling-enabled", json={"value": True})

        response = checkout(admin_client, product["id"])
        assert response.status_code == 201
        order_id = response.json()["id"]

        order = admin_client.get(ADMIN + f"/orders/{order_id}").json()
        assert order["total_price"] == 25.0
        assert order["customer_email"] == "marie@example.com"
        assert order["status"] == "NEW"

        completed = admin_client.put(ADMIN + f"/orders/{order_id}/status", json={"status": "COMPLETED"})
        assert completed.json()["status"] == "COMPLETED"

        back = admin_client.put(ADMIN + f"/orders/{order_id}/status", json={"status": "NEW"})
        assert back.status_code == 400

    @pytest.mark.parametrize("quantity, phone", [(0, "0612345678"), (100, "0612345678"), (1, "12345")])
    def test_invalid_checkout(self, admin_client, product, quantity, phone):
        admin_client.put(ADMIN + "/settings/selling-enabled", json={"value": True})
        assert checkout(admin_client, product["id"], quantity, phone).status_code == 400

    def test_checkout_with_broken_smtp_settings(self, container, admin_client, product):
        admin_client.put(ADMIN + "/settings/selling-enabled", json={"value": True})
        admin_client.put(ADMIN + "/email/templates/admin", json={"enabled": True})
        container.get(WebsiteSettingsRepository).set(SettingKeys.EMAIL_SMTP_HOST, "smtp example.com")
        container.get(WebsiteSettingsRepository).set(SettingKeys.EMAIL_SMTP_PORT, "0")

        response = checkout(admin_client, product["id"])

        assert response.status_code == 201
        assert [order["id"] for order in admin_client.get(ADMIN + "/orders").json()] == [response.json()["id"]]

    def test_unknown_order(self, admin_client):
        assert admin_client.get(ADMIN + "/orders/missing").status_code == 404
        assert admin_client.put(ADMIN + "/orders/missing/status", json={"status": "CONFIRMED"}).status_code == 404


# =============================================================================
# Appointments
# =============================================================================


class TestBookingApi:
    @pytest.fixture
    def activity(self, admin_client):
        admin_client.put(ADMIN + "/availability", json={
            "weekly_slots": [{"day_of_week": 1, "start_time": "09:00", "end_time": "12:00"}],
            "exceptions": [],
        })
        response = admin_client.post(ADMIN + "/activities", json={"name": "Massage", "duration_minutes": 60})
        assert response.status_code == 201
        return response.json()

    def test_slots_and_booking(self, admin_client, activity, next_monday):
        slots = admin_client.get(
            PUBLIC + "/appointments/slots",
            params={"activity_id": activity["id"], "date": next_monday.isoformat()},
        ).json()
        assert slots[0] == {"start_time": "09:00", "end_time": "10:00"}

        start = datetime.combine(next_monday, time(9), tzinfo=timezone.utc)
        response = admin_client.post(PUBLIC + "/appointments", json={
            "activity_id": activity["id"],
            "client_info": {"name": "Marie", "email": "marie@example.com"},
            "date_time": start.isoformat(),
        })
        assert response.status_code == 201
        appointment = response.json()
        assert appointment["status"] == "pending"

        confirmed = admin_client.post(ADMIN + f"/appointments/{appointment['id']}/confirm")
        assert confirmed.json()["status"] == "confirmed"

        again = admin_client.post(PUBLIC + "/appointments", json={
            "activity_id": activity["id"],
            "client_info": {"name": "Paul", "email": "paul@example.com"},
            "date_time": start.isoformat(),
        })
        assert again.status_code == 400

    def test_unknown_activity(self, client, next_monday):
        response = client.get(
            PUBLIC + "/appointments/slots", params={"activity_id": "missing", "date": next_monday.isoformat()}
        )
        assert response.status_code == 404

    def test_invalid_weekly_slot(self, admin_client):
        response = admin_client.put(ADMIN + "/availability", json={
            "weekly_slots": [{"day_of_week": 1, "start_time": "12:00", "end_time": "09:00"}],
            "exceptions": [],
        })
        assert response.status_code == 400


# =============================================================================
# Public files
# =============================================================================


class TestPublicFiles:
    def test_serves_stored_icon(self, client, container):
        container.get(FileStorage).write(StorageFolders.ICONS, "logo.png", b"\x89PNG")
        response = client.get(PUBLIC + "/icons/logo.png")
        assert response.status_code == 200
        assert response.content == b"\x89PNG"

    @pytest.mark.parametrize("filename", ["missing.png", "..%2F..%2Fetc%2Fpasswd", ".hidden"])
    def test_unknown_or_unsafe_names(self, client, filename):
        assert client.get(PUBLIC + f"/icons/{filename}").status_code == 404
