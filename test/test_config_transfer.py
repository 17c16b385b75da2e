"""Tests for configuration package export, preview, import and backups."""
import io
import json
import os
import zipfile

import pytest

from sitecms.application.services.catalog_service import CatalogService
from sitecms.application.services.config_transfer_service import ConfigTransferService
from sitecms.application.services.email_service import EmailService
from sitecms.application.services.page_service import PageService
from sitecms.application.services.settings_service import SettingsService
from sitecms.domain.constants.setting_keys import SettingKeys
from sitecms.domain.repositories.settings_repository import WebsiteSettingsRepository
from sitecms.infrastructure.storage.file_storage import FileStorage, StorageFolders


@pytest.fixture
def transfer(container) -> ConfigTransferService:
    return container.get(ConfigTransferService)


@pytest.fixture
def site(container):
    """A small site: one page, one product, a name, SMTP and an icon file."""
    pages = container.get(PageService)
    menu_item = pages.add_menu_item("Nos Créations")
    pages.save_page_content(menu_item.id, "<h1>Hello</h1>")

    catalog = container.get(CatalogService)
    category = catalog.create_category("Candles")
    catalog.create_product(name="Vanilla candle", price=12.5, category_ids=[category.id])

    container.get(SettingsService).update_setting(SettingKeys.WEBSITE_NAME, "Atelier Lumière")
    container.get(EmailService).update_smtp_settings("smtp.example.com", 587, "shop@example.com", "secret", "tls")
    container.get(FileStorage).write(StorageFolders.ICONS, "icon.png", b"\x89PNG")
    return {"menu_item": menu_item, "category": category}


def read_zip(content):
    archive = zipfile.ZipFile(io.BytesIO(content))
    return {name: archive.read(name) for name in archive.namelist()}


def replace_entry(content, name, data):
    """Copy a package, swapping one JSON entry."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(io.BytesIO(content)) as source, zipfile.ZipFile(buffer, "w") as archive:
        for entry in source.namelist():
            payload = json.dumps(data) if entry == name else source.read(entry)
            archive.writestr(entry, payload)
    return buffer.getvalue()


def make_package(manifest):
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        if manifest is not None:
            archive.writestr("manifest.json", json.dumps(manifest))
    return buffer.getvalue()


class TestExport:
    def test_package_layout(self, transfer, site):
        entries = read_zip(transfer.export_package())

        manifest = json.loads(entries["manifest.json"])
        assert manifest["schemaVersion"] == "1.2"
        assert manifest["summary"]["menuItemCount"] == 1
        assert manifest["summary"]["productCount"] == 1
        assert manifest["summary"]["imageCount"] == 1
        assert entries["images/icons/icon.png"] == b"\x89PNG"

        menu = json.loads(entries["data/menu-items.json"])
        assert menu[0]["url"] == "/nos-creations"

    def test_smtp_password_is_not_exported(self, transfer, site):
        entries = read_zip(transfer.export_package())
        settings = json.loads(entries["data/settings.json"])
        keys = {setting["key"] for setting in settings}
        assert SettingKeys.EMAIL_SMTP_HOST in keys
        assert SettingKeys.EMAIL_SMTP_PASSWORD not in keys

    def test_summary_counts_file_sizes(self, transfer, site):
        summary = transfer.get_export_summary().summary
        assert summary.category_count == 1
        assert summary.total_size_bytes == 4


class TestPreview:
    def test_valid_package(self, transfer, site):
        result = transfer.preview_package(transfer.export_package())
        assert result.is_valid
        assert result.manifest.summary.page_content_count == 1

    def test_not_a_zip(self, transfer):
        result = transfer.preview_package(b"definitely not a zip")
        assert not result.is_valid
        assert "ZIP" in result.error

    def test_missing_manifest(self, transfer):
        result = transfer.preview_package(make_package(None))
        assert not result.is_valid
        assert "manifest.json" in result.error

    def test_other_major_version_rejected(self, transfer):
        result = transfer.preview_package(make_package({"schemaVersion": "2.0"}))
        assert not result.is_valid
        assert "Incompatible package version 2.0" in result.error

    def test_newer_minor_version_accepted(self, transfer):
        assert transfer.preview_package(make_package({"schemaVersion": "1.9"})).is_valid

    def test_malformed_version(self, transfer):
        assert not transfer.preview_package(make_package({"schemaVersion": "one"})).is_valid

    @pytest.mark.parametrize("summary", [
        {"menuItemCount": None},
        {"productCount": "many"},
        "oops",
        ["menuItemCount"],
    ])
    def test_malformed_manifest(self, transfer, summary):
        result = transfer.preview_package(make_package({"schemaVersion": "1.2", "summary": summary}))
        assert not result.is_valid
        assert result.error == "Invalid package: malformed manifest"


class TestImport:
    def test_import_restores_exported_site(self, container, transfer, site):
        package = transfer.export_package()
        pages = container.get(PageService)
        pages.add_menu_item("Contact")
        container.get(SettingsService).update_setting(SettingKeys.WEBSITE_NAME, "Renamed")

        result = transfer.import_package(package)

        assert result.success, result.error
        assert result.summary.menu_item_count == 1
        assert result.summary.image_count == 1
        assert [item.text for item in pages.list_menu_items()] == ["Nos Créations"]
        assert pages.get_page_content(site["menu_item"].id).content == "<h1>Hello</h1>"
        assert container.get(SettingsService).get_setting(SettingKeys.WEBSITE_NAME).value == "Atelier Lumière"
        products = container.get(CatalogService).list_products()
        assert products[0].category_ids == [site["category"].id]

    def test_import_keeps_local_smtp_password(self, container, transfer, site):
        transfer.import_package(transfer.export_package())
        smtp = container.get(EmailService).get_smtp_settings()
        assert smtp.password == "secret"

    def test_backup_written_before_import(self, transfer, site):
        result = transfer.import_package(transfer.export_package())

        assert os.path.isfile(result.backup_path)
        backups = transfer.list_backups()
        assert [backup.path for backup in backups] == [result.backup_path]
        backup = transfer.read_backup(backups[0].filename)
        assert "manifest.json" in read_zip(backup)

    def test_invalid_package_changes_nothing(self, container, transfer, site):
        result = transfer.import_package(make_package({"schemaVersion": "0.1"}))

        assert not result.success
        assert result.backup_path is None
        assert transfer.list_backups() == []
        assert len(container.get(PageService).list_menu_items()) == 1

    def test_unknown_backup_name(self, transfer):
        assert transfer.read_backup("../secrets.zip") is None
        assert transfer.read_backup("backup-0123456789abcdef0123456789abcdef.zip") is None

    def test_invalid_setting_values_are_skipped(self, container, transfer, site):
        settings = container.get(SettingsService)
        settings.update_setting(SettingKeys.THEME_COLOR, "blue")
        package = read_zip(transfer.export_package())
        exported = json.loads(package["data/settings.json"])
        for setting in exported:
            if setting["key"] == SettingKeys.THEME_COLOR:
                setting["value"] = "not a colour!"
            elif setting["key"] == SettingKeys.EMAIL_SMTP_PORT:
                setting["value"] = "0"
        tampered = replace_entry(transfer.export_package(), "data/settings.json", exported)

        result = transfer.import_package(tampered)

        assert result.success, result.error
        assert settings.get_setting(SettingKeys.THEME_COLOR).value == "blue"
        assert settings.get_setting(SettingKeys.WEBSITE_NAME).value == "Atelier Lumière"
        assert container.get(EmailService).get_smtp_settings().port == 587

    def test_setting_with_unknown_key_is_skipped(self, container, transfer, site):
        exported = json.loads(read_zip(transfer.export_package())["data/settings.json"])
        exported.append({"key": "admin-password", "value": "hijacked"})
        exported.append({"key": SettingKeys.WEBSITE_ICON, "value": "not an object"})

        result = transfer.import_package(replace_entry(transfer.export_package(), "data/settings.json", exported))

        assert result.success, result.error
        repository = container.get(WebsiteSettingsRepository)
        assert repository.find_by_key("admin-password") is None
        assert repository.find_by_key(SettingKeys.WEBSITE_ICON) is None
