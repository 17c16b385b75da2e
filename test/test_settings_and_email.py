"""Tests for setting value objects, email configuration and background jobs."""
import asyncio
import smtplib
from datetime import timedelta
from types import SimpleNamespace

import pytest
from cryptography.fernet import Fernet

from sitecms.application.services.catalog_service import CatalogService
from sitecms.application.services.email_service import EmailService
from sitecms.application.services.order_service import OrderService
from sitecms.application.services.reminder_scheduler import ReminderScheduler
from sitecms.application.services.settings_service import SettingsService
from sitecms.application.use_cases.email.send_appointment_email import SendAppointmentEmailUseCase
from sitecms.application.use_cases.email.send_order_notifications import SendOrderNotificationEmailsUseCase
from sitecms.domain.constants.setting_keys import SettingKeys, template_keys
from sitecms.domain.models.config_package import PackageVersion
from sitecms.domain.models.email import EmailSettings, EmailTemplate, EmailTemplateType, SmtpSettings
from sitecms.domain.models.order import Order, OrderItem
from sitecms.domain.models.setting_normalizers import normalize_setting
from sitecms.domain.models.website_setting import (
    CustomLoader,
    HeaderMenuTextColor,
    ImageMetadata,
    LoaderBackgroundColor,
    ThemeColor,
    WebsiteFont,
    WebsiteIcon,
)
from sitecms.domain.repositories.email_repository import EmailLogRepository, EmailSettingsRepository
from sitecms.domain.repositories.settings_repository import WebsiteSettingsRepository
from sitecms.infrastructure.email.password_encryption import PasswordEncryption
from sitecms.infrastructure.email.smtp_email_sender import SendResult, SmtpEmailSender
from sitecms.utils.datetime_utils import now


def png_metadata(**changes):
    values = dict(filename="a.png", original_name="logo.png", size=2048, format="png", mime_type="image/png")
    values.update(changes)
    return ImageMetadata(**values)


# =============================================================================
# Setting values
# =============================================================================


class TestThemeAndColors:
    def test_palette_color(self):
        color = ThemeColor("blue")
        assert color.display_name == "Blue"
        assert color.hex_value == "#3182ce"

    @pytest.mark.parametrize("value", ["Blue", "", "magenta", "a" * 21])
    def test_invalid_theme_colors(self, value):
        with pytest.raises(ValueError):
            ThemeColor(value)

    def test_header_menu_text_color_is_lowercased(self):
        assert HeaderMenuTextColor("#1A2B3C").value == "#1a2b3c"
        assert HeaderMenuTextColor().value == "#000000"
        with pytest.raises(ValueError):
            HeaderMenuTextColor("#123")

    def test_loader_background_is_uppercased(self):
        color = LoaderBackgroundColor(light="#ffffff", dark="#1a202c")
        assert color.to_dict() == {"light": "#FFFFFF", "dark": "#1A202C"}
        assert LoaderBackgroundColor.from_dict(None) == LoaderBackgroundColor()
        with pytest.raises(ValueError):
            LoaderBackgroundColor(dark="black")


class TestWebsiteFont:
    def test_lookup_normalizes_name(self):
        assert WebsiteFont("  open   SANS ").name == "Open Sans"

    def test_google_fonts_url(self):
        assert WebsiteFont("Open Sans").google_fonts_url == (
            "https://fonts.googleapis.com/css2?family=Open+Sans:wght@400;600;700&display=swap"
        )

    def test_unknown_font(self):
        with pytest.raises(ValueError):
            WebsiteFont("Comic Sans MS")


class TestImages:
    def test_valid_icon(self):
        icon = WebsiteIcon(url="/api/v1/public/icons/a.png", metadata=png_metadata())
        assert WebsiteIcon.from_dict(icon.to_dict()).url == icon.url

    @pytest.mark.parametrize("url", ["", "icons/a.png", "/icons/a.bmp", "ftp://example.com/a.png"])
    def test_invalid_icon_urls(self, url):
        with pytest.raises(ValueError):
            WebsiteIcon(url=url, metadata=png_metadata())

    @pytest.mark.parametrize("changes", [
        {"size": 0},
        {"size": 6 * 1024 * 1024},
        {"mime_type": "image/jpeg"},
        {"format": "bmp"},
        {"filename": " "},
    ])
    def test_invalid_icon_metadata(self, changes):
        with pytest.raises(ValueError):
            WebsiteIcon(url="/icons/a.png", metadata=png_metadata(**changes))

    def test_upload_date_cannot_be_in_the_future(self):
        with pytest.raises(ValueError, match="future"):
            WebsiteIcon(url="/icons/a.png", metadata=png_metadata(uploaded_at=now() + timedelta(days=1)))

    def test_video_loader(self):
        metadata = ImageMetadata("l.mp4", "intro.mp4", 1024, "mp4", "video/mp4")
        loader = CustomLoader(type="video", url="/api/v1/public/loaders/l.mp4", metadata=metadata)
        assert loader.to_dict()["type"] == "video"
        assert CustomLoader.type_for_extension(".WEBM") == "video"

    def test_loader_type_must_match_file(self):
        metadata = ImageMetadata("l.mp4", "intro.mp4", 1024, "mp4", "video/mp4")
        with pytest.raises(ValueError):
            CustomLoader(type="gif", url="/loaders/l.mp4", metadata=metadata)
        with pytest.raises(ValueError):
            CustomLoader.type_for_extension("avi")


class TestNormalizeSetting:
    @pytest.mark.parametrize("key, value, expected", [
        (SettingKeys.THEME_COLOR, "blue", "blue"),
        (SettingKeys.SELLING_ENABLED, True, "true"),
        (SettingKeys.EMAIL_SMTP_PORT, "2525", "2525"),
        (SettingKeys.EMAIL_ADMIN_ADDRESS, "Owner@Example.com", "owner@example.com"),
        (template_keys("purchaser")["enabled"], "TRUE", "true"),
    ])
    def test_valid_values(self, key, value, expected):
        assert normalize_setting(key, value) == expected

    @pytest.mark.parametrize("key, value", [
        (SettingKeys.THEME_COLOR, "not a colour!"),
        (SettingKeys.THEME_COLOR, 42),
        (SettingKeys.EMAIL_SMTP_PORT, "0"),
        (SettingKeys.EMAIL_SMTP_PORT, True),
        (SettingKeys.EMAIL_SMTP_ENCRYPTION, "starttls"),
        (SettingKeys.WEBSITE_ICON, "/icons/a.png"),
        (template_keys("admin")["subject"], "   "),
        ("favourite-animal", "cat"),
    ])
    def test_invalid_values(self, key, value):
        with pytest.raises(ValueError):
            normalize_setting(key, value)


class TestPackageVersion:
    def test_parse_and_compare(self):
        version = PackageVersion.parse("1.2")
        assert str(version) == "1.2"
        assert version.is_compatible_with(PackageVersion(1, 0))
        assert not version.is_compatible_with(PackageVersion(2, 2))

    @pytest.mark.parametrize("value", ["1", "1.2.3", "v1.2", "", None])
    def test_invalid_versions(self, value):
        with pytest.raises(ValueError):
            PackageVersion.parse(value)


# =============================================================================
# Email configuration
# =============================================================================


class TestEmailModels:
    def test_default_templates_are_disabled(self):
        for template_type in EmailTemplateType:
            template = EmailTemplate.create_default(template_type)
            assert not template.enabled
            assert template.subject

    def test_template_rules(self):
        with pytest.raises(ValueError):
            EmailTemplate(EmailTemplateType.ADMIN, subject="  ", body="Body")
        with pytest.raises(ValueError):
            EmailTemplate(EmailTemplateType.ADMIN, subject="Hi", body="x" * 10001)
        with pytest.raises(ValueError):
            EmailTemplate("newsletter", subject="Hi", body="Body")

    def test_smtp_settings(self):
        smtp = SmtpSettings(host=" smtp.example.com ", port=465, username="shop", password="pw", encryption="ssl")
        assert smtp.is_configured()
        assert smtp.to_public_dict()["password"] == "********"
        assert not SmtpSettings.create_default().is_configured()

    @pytest.mark.parametrize("changes", [
        {"port": 0},
        {"port": 70000},
        {"host": "smtp example.com"},
        {"encryption": "starttls"},
    ])
    def test_invalid_smtp_settings(self, changes):
        with pytest.raises(ValueError):
            SmtpSettings(**changes)

    def test_admin_address_is_lowercased(self):
        assert EmailSettings("Owner@Example.COM").administrator_email == "owner@example.com"
        with pytest.raises(ValueError):
            EmailSettings("owner")


class TestPasswordEncryption:
    def test_round_trip(self):
        encryption = PasswordEncryption(Fernet.generate_key().decode())
        stored = encryption.encrypt("secret")
        assert stored != "secret"
        assert encryption.decrypt(stored) == "secret"

    def test_plain_text_without_key(self):
        encryption = PasswordEncryption(None)
        assert not encryption.enabled
        assert encryption.encrypt("secret") == "secret"

    def test_password_stored_before_key_was_set(self):
        encryption = PasswordEncryption(Fernet.generate_key().decode())
        assert encryption.decrypt("legacy-plain") == "legacy-plain"


class TestEmailService:
    def test_masked_password_keeps_stored_one(self, container):
        emails = container.get(EmailService)
        emails.update_smtp_settings("smtp.example.com", 587, "shop@example.com", "secret", "tls")
        emails.update_smtp_settings("smtp.example.com", 2525, "shop@example.com", "********", "none")

        smtp = emails.get_smtp_settings()
        assert smtp.password == "secret"
        assert smtp.port == 2525

    def test_template_update_is_partial(self, container):
        emails = container.get(EmailService)
        updated = emails.update_template("purchaser", enabled=True)

        assert updated.enabled
        assert updated.subject == EmailTemplate.create_default(EmailTemplateType.PURCHASER).subject
        assert emails.get_template("purchaser").enabled
        assert len(emails.list_templates(appointment_only=True)) == 5

    def test_unknown_template(self, container):
        with pytest.raises(ValueError):
            container.get(EmailService).get_template("newsletter")


class TestStoredEmailSettingsFallback:
    @pytest.fixture
    def stored(self, container):
        return container.get(WebsiteSettingsRepository)

    @pytest.mark.parametrize("port", ["0", "70000", "smtp", {"port": 25}])
    def test_invalid_port_falls_back_to_default(self, container, stored, port):
        container.get(EmailService).update_smtp_settings("smtp.example.com", 587, "shop@example.com", "secret", "tls")
        stored.set(SettingKeys.EMAIL_SMTP_PORT, port)

        smtp = container.get(EmailSettingsRepository).get_smtp_settings()

        assert smtp.port == SmtpSettings.create_default().port
        assert smtp.host == "smtp.example.com"

    def test_invalid_host_falls_back_to_defaults(self, container, stored):
        stored.set(SettingKeys.EMAIL_SMTP_HOST, "smtp example.com")
        smtp = container.get(EmailSettingsRepository).get_smtp_settings()
        assert not smtp.is_configured()

    def test_invalid_template_falls_back_to_default(self, container, stored):
        keys = template_keys(EmailTemplateType.ADMIN.value)
        stored.set(keys["subject"], "Order")
        stored.set(keys["body"], "x" * 10001)
        stored.set(keys["enabled"], "true")

        template = container.get(EmailSettingsRepository).get_template(EmailTemplateType.ADMIN)

        assert template == EmailTemplate.create_default(EmailTemplateType.ADMIN)

    def test_smtp_endpoint_still_answers(self, admin_client, stored):
        stored.set(SettingKeys.EMAIL_SMTP_PORT, "0")
        response = admin_client.get("/api/v1/admin/email/smtp")
        assert response.status_code == 200


class FakeSMTP:
    """Stands in for smtplib.SMTP; ``fail_on`` names the step that raises."""

    fail_on = None
    instances = []

    def __init__(self, host, port, timeout=None, context=None):
        self.host = host
        self.closed = False
        self.sent = []
        FakeSMTP.instances.append(self)

    def starttls(self, context=None):
        if self.fail_on == "starttls":
            raise smtplib.SMTPNotSupportedError("STARTTLS extension not supported by server.")

    def login(self, username, password):
        if self.fail_on == "login":
            raise smtplib.SMTPAuthenticationError(535, b"5.7.8 Authentication failed")

    def sendmail(self, sender, recipients, message):
        self.sent.append((sender, recipients))

    def quit(self):
        self.close()

    def close(self):
        self.closed = True


class TestSmtpEmailSender:
    @pytest.fixture
    def fake_smtp(self, monkeypatch):
        monkeypatch.setattr(FakeSMTP, "instances", [])
        monkeypatch.setattr(FakeSMTP, "fail_on", None)
        monkeypatch.setattr(smtplib, "SMTP", FakeSMTP)
        monkeypatch.setattr(smtplib, "SMTP_SSL", FakeSMTP)
        return FakeSMTP

    @pytest.fixture
    def settings(self):
        return SmtpSettings(host="smtp.example.com", port=587, username="shop", password="pw", encryption="tls")

    def test_send_closes_connection(self, fake_smtp, settings):
        result = SmtpEmailSender().send(settings, "shop@example.com", "marie@example.com", "Hi", "Body")

        assert result.success
        connection = fake_smtp.instances[0]
        assert connection.sent == [("shop@example.com", ["marie@example.com"])]
        assert connection.closed

    @pytest.mark.parametrize("step, error", [
        ("starttls", "Connection failed"),
        ("login", "Authentication failed"),
    ])
    def test_failed_handshake_closes_connection(self, fake_smtp, settings, step, error):
        fake_smtp.fail_on = step

        result = SmtpEmailSender().test_connection(settings)

        assert not result.success
        assert error in result.error_message
        assert fake_smtp.instances[0].closed

    def test_failed_ssl_login_closes_connection(self, fake_smtp):
        fake_smtp.fail_on = "login"
        settings = SmtpSettings(host="smtp.example.com", port=465, username="shop", password="pw", encryption="ssl")

        result = SmtpEmailSender().send(settings, "shop@example.com", "marie@example.com", "Hi", "Body")

        assert not result.success
        assert fake_smtp.instances[0].closed
        assert fake_smtp.instances[0].sent == []


# =============================================================================
# Order notifications
# =============================================================================


@pytest.fixture
def order():
    return Order(
        customer_first_name="Marie",
        customer_last_name="Dupont",
        customer_email="marie@example.com",
        customer_phone="0612345678",
        items=[OrderItem("p1", "Candle", 2, 12.5)],
    )


@pytest.fixture
def sent(container, monkeypatch):
    outbox = []

    def fake_send(settings, sender, recipient, subject, body):
        outbox.append({"sender": sender, "recipient": recipient, "subject": subject, "body": body})
        return SendResult(True)

    monkeypatch.setattr(container.get(SmtpEmailSender), "send", fake_send)
    return outbox


class TestOrderNotifications:
    def test_smtp_not_configured(self, container, order, sent):
        result = container.get(SendOrderNotificationEmailsUseCase).execute(order)

        assert result.to_dict() == {
            "admin_email_sent": False,
            "purchaser_email_sent": False,
            "admin_error": "SMTP settings not configured",
            "purchaser_error": "SMTP settings not configured",
        }
        assert sent == []

    def test_enabled_templates_are_sent(self, container, order, sent):
        emails = container.get(EmailService)
        emails.update_smtp_settings("smtp.example.com", 587, "shop@example.com", "secret", "tls")
        emails.update_template("admin", enabled=True)
        emails.update_template("purchaser", enabled=True)

        result = container.get(SendOrderNotificationEmailsUseCase).execute(order)

        assert result.admin_error == "Email settings not configured"
        assert result.purchaser_email_sent
        assert [mail["recipient"] for mail in sent] == ["marie@example.com"]
        assert sent[0]["sender"] == "shop@example.com"
        assert order.id in sent[0]["subject"]
        assert "- Candle x2 : 25,00 €" in sent[0]["body"]

        logs = container.get(EmailLogRepository).find_by_reference(order.id)
        assert [log.status.value for log in logs] == ["sent"]

    def test_admin_email_goes_to_administrator(self, container, order, sent):
        emails = container.get(EmailService)
        emails.update_smtp_settings("smtp.example.com", 587, "shop@example.com", "secret", "tls")
        emails.update_email_settings("owner@example.com")
        emails.update_template("admin", enabled=True)

        result = container.get(SendOrderNotificationEmailsUseCase).execute(order)

        assert result.admin_email_sent
        assert not result.purchaser_email_sent
        assert [mail["recipient"] for mail in sent] == ["owner@example.com"]


class TestBestEffortNotifications:
    @pytest.fixture
    def broken_notifications(self, monkeypatch):
        def explode(self, *args, **kwargs):
            raise ValueError("Port must be between 1 and 65535")

        monkeypatch.setattr(SendOrderNotificationEmailsUseCase, "execute", explode)
        monkeypatch.setattr(SendAppointmentEmailUseCase, "execute", explode)

    def test_order_is_kept_when_notifications_fail(self, container, broken_notifications):
        container.get(SettingsService).update_setting(SettingKeys.SELLING_ENABLED, True)
        product = container.get(CatalogService).create_product(name="Candle", price=12.5)
        orders = container.get(OrderService)

        order = orders.create_order("Marie", "Dupont", "marie@example.com", "0612345678", [
            {"product_id": product.id, "quantity": 1},
        ])

        assert [stored.id for stored in orders.list_orders()] == [order.id]

    def test_appointment_notify_reports_failure(self, container, broken_notifications):
        appointment = SimpleNamespace(id="appointment-1")
        sent = container.get(SendAppointmentEmailUseCase).notify(EmailTemplateType.APPOINTMENT_ADMIN_NEW, appointment)
        assert sent is False


# =============================================================================
# Reminder job
# =============================================================================


class CountingService:
    def __init__(self):
        self.runs = 0

    def send_reminders(self):
        self.runs += 1


class TestReminderScheduler:
    def test_disabled_at_interval_zero(self):
        scheduler = ReminderScheduler(CountingService(), interval_seconds=0)
        scheduler.start()
        assert not scheduler.enabled
        assert not scheduler.running

    def test_runs_until_stopped(self):
        service = CountingService()
        scheduler = ReminderScheduler(service, interval_seconds=60)

        async def scenario():
            scheduler.start()
            assert scheduler.running
            await asyncio.sleep(0.2)
            await scheduler.stop()

        asyncio.run(scenario())

        assert service.runs == 1
        assert not scheduler.running

    def test_failing_job_does_not_stop_the_loop(self):
        class FailingService:
            runs = 0

            def send_reminders(self):
                self.runs += 1
                raise ValueError("Port must be between 1 and 65535")

        service = FailingService()
        scheduler = ReminderScheduler(service, interval_seconds=60)

        asyncio.run(scheduler.run_once())
        asyncio.run(scheduler.run_once())

        assert service.runs == 2
