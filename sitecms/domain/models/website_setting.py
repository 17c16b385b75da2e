"""
Website Setting Model
=====================

Key/value entry of the website settings store, and the value objects
validating the values of the typed keys.
"""
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from sitecms.domain.constants.available_fonts import find_font
from sitecms.domain.constants.setting_keys import is_valid_setting_key
from sitecms.domain.constants.theme_palette import THEME_COLOR_PALETTE
from sitecms.utils.datetime_utils import now, parse_iso, to_iso

WEBSITE_NAME_MAX_LENGTH = 100
THEME_COLOR_PATTERN = re.compile(r"^[a-z]{1,20}$")
HEADER_MENU_COLOR_PATTERN = re.compile(r"^#[0-9a-f]{6}$")
LOADER_COLOR_PATTERN = re.compile(r"^#[0-9A-F]{6}$")
ABSOLUTE_URL_PATTERN = re.compile(r"^https?://[^\s/]+[^\s]*$")
THEME_MODES = ("light", "dark", "system")

IMAGE_EXTENSIONS = ("ico", "png", "jpg", "jpeg", "svg", "gif", "webp")
IMAGE_MIME_TYPES: Dict[str, Tuple[str, ...]] = {
    "ico": ("image/x-icon", "image/vnd.microsoft.icon"),
    "png": ("image/png",),
    "jpg": ("image/jpeg",),
    "jpeg": ("image/jpeg",),
    "svg": ("image/svg+xml",),
    "gif": ("image/gif",),
    "webp": ("image/webp",),
}
IMAGE_MAX_BYTES = 5 * 1024 * 1024

LOADER_TYPES: Dict[str, Tuple[str, ...]] = {
    "gif": ("gif",),
    "video": ("mp4", "webm"),
}
LOADER_MIME_TYPES: Dict[str, Tuple[str, ...]] = {
    "gif": ("image/gif",),
    "mp4": ("video/mp4",),
    "webm": ("video/webm",),
}
LOADER_MAX_BYTES = 10 * 1024 * 1024


@dataclass
class WebsiteSetting:
    """One entry of the settings store; ``value`` is any JSON value."""
    key: str
    value: Any
    updated_at: datetime = field(default_factory=lambda: now())

    def __post_init__(self) -> None:
        if not self.key or not is_valid_setting_key(self.key):
            raise ValueError(f"Invalid setting key '{self.key}'")

    def update_value(self, value: Any) -> None:
        self.value = value
        self.updated_at = now()


def clean_website_name(name: Optional[str]) -> str:
    name = (name or "").strip()
    if not name:
        raise ValueError("Website name cannot be empty")
    if len(name) > WEBSITE_NAME_MAX_LENGTH:
        raise ValueError(f"Website name must be at most {WEBSITE_NAME_MAX_LENGTH} characters")
    return name


def parse_selling_enabled(value: Any) -> bool:
    """Read the ``selling-enabled`` flag, stored as the string "true" or "false"."""
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true"


def clean_theme_mode(value: Optional[str]) -> str:
    value = (value or "").strip().lower()
    if value not in THEME_MODES:
        raise ValueError(f"Theme mode must be one of: {', '.join(THEME_MODES)}")
    return value


@dataclass(frozen=True)
class ThemeColor:
    value: str

    def __post_init__(self) -> None:
        value = (self.value or "").strip()
        if not THEME_COLOR_PATTERN.match(value):
            raise ValueError("Theme color must be 1 to 20 lowercase letters")
        if value not in THEME_COLOR_PALETTE:
            raise ValueError(
                f"Theme color must be one of: {', '.join(THEME_COLOR_PALETTE)}"
            )
        object.__setattr__(self, "value", value)

    @property
    def display_name(self) -> str:
        return THEME_COLOR_PALETTE[self.value][0]

    @property
    def hex_value(self) -> str:
        return THEME_COLOR_PALETTE[self.value][1]


@dataclass(frozen=True)
class WebsiteFont:
    """Font picked from AVAILABLE_FONTS; the canonical font name is kept."""
    name: str

    def __post_init__(self) -> None:
        metadata = find_font(self.name)
        if metadata is None:
            raise ValueError(f"Font '{self.name}' is not available")
        object.__setattr__(self, "name", metadata.name)

    @property
    def metadata(self):
        return find_font(self.name)

    @property
    def google_fonts_url(self) -> str:
        family = self.name.replace(" ", "+")
        weights = ";".join(str(weight) for weight in self.metadata.weights)
        return f"https://fonts.googleapis.com/css2?family={family}:wght@{weights}&display=swap"


@dataclass(frozen=True)
class HeaderMenuTextColor:
    value: str = "#000000"

    def __post_init__(self) -> None:
        value = (self.value or "").strip().lower()
        if not HEADER_MENU_COLOR_PATTERN.match(value):
            raise ValueError("Header menu text color must be a hex color like #1a2b3c")
        object.__setattr__(self, "value", value)


@dataclass(frozen=True)
class LoaderBackgroundColor:
    light: str = "#FFFFFF"
    dark: str = "#1A202C"

    def __post_init__(self) -> None:
        for mode in ("light", "dark"):
            value = (getattr(self, mode) or "").strip().upper()
            if not LOADER_COLOR_PATTERN.match(value):
                raise ValueError(f"Loader background color ({mode}) must be a hex color like #1A202C")
            object.__setattr__(self, mode, value)

    def to_dict(self) -> Dict[str, str]:
        return {"light": self.light, "dark": self.dark}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "LoaderBackgroundColor":
        data = data or {}
        return cls(light=data.get("light", "#FFFFFF"), dark=data.get("dark", "#1A202C"))


def _check_url(url: Optional[str], entity_name: str) -> str:
    url = (url or "").strip()
    if not url:
        raise ValueError(f"{entity_name} URL cannot be empty")
    if not (url.startswith("/") or ABSOLUTE_URL_PATTERN.match(url)):
        raise ValueError(f"{entity_name} URL must be a valid URL")
    return url


def _extension(name: str) -> str:
    base = name.split("?", 1)[0].lower()
    return base.rsplit(".", 1)[-1] if "." in base else ""


@dataclass(frozen=True)
class ImageMetadata:
    filename: str
    original_name: str
    size: int
    format: str
    mime_type: str
    uploaded_at: datetime = field(default_factory=lambda: now())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "filename": self.filename,
            "originalName": self.original_name,
            "size": self.size,
            "format": self.format,
            "mimeType": self.mime_type,
            "uploadedAt": to_iso(self.uploaded_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ImageMetadata":
        uploaded_at = data.get("uploadedAt", data.get("uploaded_at"))
        if isinstance(uploaded_at, str):
            uploaded_at = parse_iso(uploaded_at)
        return cls(
            filename=data.get("filename", ""),
            original_name=data.get("originalName", data.get("original_name", "")),
            size=data.get("size", 0),
            format=data.get("format", ""),
            mime_type=data.get("mimeType", data.get("mime_type", "")),
            uploaded_at=uploaded_at or now(),
        )


@dataclass(frozen=True)
class BaseImage:
    """
    Uploaded image referenced by a setting (website icon, header logo).

    Subclasses set ``entity_name``; the checks are shared.
    """
    url: str
    metadata: ImageMetadata

    entity_name = "Image"
    max_size_bytes = IMAGE_MAX_BYTES

    def __post_init__(self) -> None:
        url = _check_url(self.url, self.entity_name)
        if _extension(url) not in IMAGE_EXTENSIONS:
            raise ValueError(
                f"{self.entity_name} must have a valid extension: "
                f"{', '.join('.' + ext for ext in IMAGE_EXTENSIONS)}"
            )
        object.__setattr__(self, "url", url)
        self._check_metadata()

    def _check_metadata(self) -> None:
        meta = self.metadata
        if meta is None:
            raise ValueError(f"{self.entity_name} metadata cannot be null")
        if not (meta.filename or "").strip():
            raise ValueError(f"{self.entity_name} filename cannot be empty")
        if not (meta.original_name or "").strip():
            raise ValueError(f"{self.entity_name} original name cannot be empty")
        if meta.size <= 0:
            raise ValueError(f"{self.entity_name} size must be greater than 0")
        if meta.size > self.max_size_bytes:
            raise ValueError(
                f"{self.entity_name} size cannot exceed {self.max_size_bytes // (1024 * 1024)}MB"
            )
        image_format = (meta.format or "").lower()
        if image_format not in IMAGE_EXTENSIONS:
            raise ValueError(f"{self.entity_name} format must be one of: {', '.join(IMAGE_EXTENSIONS)}")
        if meta.mime_type not in IMAGE_MIME_TYPES[image_format]:
            raise ValueError(
                f"{self.entity_name} MIME type must be one of: {', '.join(IMAGE_MIME_TYPES[image_format])}"
            )
        if meta.uploaded_at > now():
            raise ValueError(f"{self.entity_name} upload date cannot be in the future")

    def to_dict(self) -> Dict[str, Any]:
        return {"url": self.url, "metadata": self.metadata.to_dict()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        return cls(url=data.get("url"), metadata=ImageMetadata.from_dict(data.get("metadata") or {}))


class WebsiteIcon(BaseImage):
    entity_name = "Website icon"


class HeaderLogo(BaseImage):
    entity_name = "Header logo"


@dataclass(frozen=True)
class CustomLoader:
    """Animated loader shown while the public site loads (GIF or short video)."""
    type: str
    url: str
    metadata: ImageMetadata

    def __post_init__(self) -> None:
        if self.type not in LOADER_TYPES:
            raise ValueError(f"Loader type must be one of: {', '.join(LOADER_TYPES)}")
        url = _check_url(self.url, "Custom loader")
        allowed = LOADER_TYPES[self.type]
        if _extension(url) not in allowed:
            raise ValueError(f"A {self.type} loader must be a {', '.join(allowed)} file")
        object.__setattr__(self, "url", url)

        meta = self.metadata
        if meta.size <= 0:
            raise ValueError("Custom loader size must be greater than 0")
        if meta.size > LOADER_MAX_BYTES:
            raise ValueError(f"Custom loader size cannot exceed {LOADER_MAX_BYTES // (1024 * 1024)}MB")
        loader_format = (meta.format or "").lower()
        if loader_format not in allowed:
            raise ValueError(f"Custom loader format must be one of: {', '.join(allowed)}")
        if meta.mime_type not in LOADER_MIME_TYPES[loader_format]:
            raise ValueError("Custom loader MIME type does not match its format")

    @staticmethod
    def type_for_extension(extension: str) -> str:
        extension = extension.lower().lstrip(".")
        for loader_type, extensions in LOADER_TYPES.items():
            if extension in extensions:
                return loader_type
        raise ValueError("Custom loader must be a gif, mp4 or webm file")

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "url": self.url, "metadata": self.metadata.to_dict()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CustomLoader":
        return cls(
            type=data.get("type"),
            url=data.get("url"),
            metadata=ImageMetadata.from_dict(data.get("metadata") or {}),
        )
