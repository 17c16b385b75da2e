"""
Social Network Model
====================

Links to the business' social networks shown in the website footer.
"""
import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List

from sitecms.utils.datetime_utils import now

logger = logging.getLogger(__name__)

SOCIAL_URL_MAX_LENGTH = 2048
SOCIAL_LABEL_MAX_LENGTH = 50
LABEL_FORBIDDEN_CHARS = re.compile(r"[<>&\"']")

WEB_URL_PATTERN = re.compile(r"^https?://[^\s/]+.*$")
MAILTO_PATTERN = re.compile(r"^mailto:[^\s@]+@[^\s@]+\.[^\s@]+$")
TEL_PATTERN = re.compile(r"^tel:[\d\s\-+()]+$")


class SocialNetworkType(str, Enum):
    INSTAGRAM = "instagram"
    FACEBOOK = "facebook"
    LINKEDIN = "linkedin"
    EMAIL = "email"
    PHONE = "phone"

    @property
    def default_label(self) -> str:
        return SOCIAL_NETWORK_LABELS[self]

    @property
    def url_placeholder(self) -> str:
        return SOCIAL_NETWORK_PLACEHOLDERS[self]


SOCIAL_NETWORK_LABELS = {
    SocialNetworkType.INSTAGRAM: "Instagram",
    SocialNetworkType.FACEBOOK: "Facebook",
    SocialNetworkType.LINKEDIN: "LinkedIn",
    SocialNetworkType.EMAIL: "Email",
    SocialNetworkType.PHONE: "Phone",
}

SOCIAL_NETWORK_PLACEHOLDERS = {
    SocialNetworkType.INSTAGRAM: "https://instagram.com/username",
    SocialNetworkType.FACEBOOK: "https://facebook.com/page",
    SocialNetworkType.LINKEDIN: "https://linkedin.com/in/profile",
    SocialNetworkType.EMAIL: "mailto:contact@example.com",
    SocialNetworkType.PHONE: "tel:+1234567890",
}


def check_social_url(url: str, network_type: SocialNetworkType) -> str:
    """
    Validate the URL of a social network.

    An empty URL is accepted; it stands for a network the owner does not use.

    Raises:
        ValueError: If the URL does not match the network type
    """
    url = (url or "").strip()
    if not url:
        return ""
    if network_type == SocialNetworkType.EMAIL:
        if not MAILTO_PATTERN.match(url):
            raise ValueError("Invalid email format. Expected: mailto:email@example.com")
    elif network_type == SocialNetworkType.PHONE:
        if not TEL_PATTERN.match(url):
            raise ValueError("Invalid phone format. Expected: tel:+1234567890")
    elif not WEB_URL_PATTERN.match(url):
        raise ValueError("Invalid URL format. Expected: https://...")
    return url


@dataclass
class SocialNetwork:
    type: SocialNetworkType
    url: str = ""
    label: str = ""
    enabled: bool = False
    updated_at: datetime = field(default_factory=lambda: now())

    def __post_init__(self) -> None:
        self.type = SocialNetworkType(self.type)
        self.url = check_social_url(self.url, self.type)
        self.label = (self.label or "").strip() or self.type.default_label
        if self.enabled and not self.url:
            raise ValueError(f"{self.label} needs a URL to be enabled")

    @classmethod
    def create_default(cls, network_type: SocialNetworkType) -> "SocialNetwork":
        return cls(type=network_type, url="", label=network_type.default_label, enabled=False)

    @classmethod
    def create_all_defaults(cls) -> List["SocialNetwork"]:
        return [cls.create_default(network_type) for network_type in SocialNetworkType]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "url": self.url,
            "label": self.label,
            "enabled": self.enabled,
        }


@dataclass
class ValidationError:
    field: str
    message: str


@dataclass
class ValidationResult:
    is_valid: bool
    errors: List[ValidationError]

    def message(self) -> str:
        return "; ".join(f"{error.field}: {error.message}" for error in self.errors)


class SocialNetworkValidationService:
    """Checks raw social network payloads before they reach the model."""

    def validate(self, data: Any, index: int = 0) -> ValidationResult:
        errors: List[ValidationError] = []
        if not isinstance(data, dict):
            errors.append(ValidationError("socialNetwork", "Social network data must be an object"))
            return ValidationResult(False, errors)

        network_type = data.get("type")
        valid_types = [t.value for t in SocialNetworkType]
        if not isinstance(network_type, str) or not network_type:
            errors.append(ValidationError("type", "type is required and must be a string"))
        elif network_type not in valid_types:
            errors.append(ValidationError("type", f"type must be one of: {', '.join(valid_types)}"))

        url = data.get("url")
        if not isinstance(url, str):
            errors.append(ValidationError("url", "url is required and must be a string"))
        elif len(url) > SOCIAL_URL_MAX_LENGTH:
            errors.append(ValidationError("url", f"url must be less than {SOCIAL_URL_MAX_LENGTH} characters"))

        label = data.get("label")
        if not isinstance(label, str):
            errors.append(ValidationError("label", "label is required and must be a string"))
        elif not label:
            errors.append(ValidationError("label", "label cannot be empty"))
        elif len(label) > SOCIAL_LABEL_MAX_LENGTH:
            errors.append(ValidationError("label", f"label must be less than {SOCIAL_LABEL_MAX_LENGTH} characters"))
        elif LABEL_FORBIDDEN_CHARS.search(label):
            errors.append(ValidationError("label", "label contains invalid characters"))

        enabled = data.get("enabled")
        if not isinstance(enabled, bool):
            errors.append(ValidationError("enabled", "enabled is required and must be a boolean"))
        elif enabled and isinstance(url, str) and not url.strip():
            errors.append(ValidationError("url", "an enabled network needs a URL"))

        if errors:
            logger.warning(
                "Validation failed for social network #%s (%s): %d error(s)",
                index, network_type, len(errors),
            )
        return ValidationResult(not errors, errors)

    def validate_all(self, items: Any) -> ValidationResult:
        if not isinstance(items, list):
            return ValidationResult(
                False, [ValidationError("socialNetworks", "Invalid social networks data: expected an array")]
            )
        errors: List[ValidationError] = []
        for index, item in enumerate(items):
            errors.extend(self.validate(item, index).errors)
        return ValidationResult(not errors, errors)
