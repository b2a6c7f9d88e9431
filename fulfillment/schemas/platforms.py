"""
Rich-message platform identifiers.

Dialogflow tags every rich message and every request source with a platform.
The set is fixed; handler code refers to the members of ``Platform``.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union


class Platform(str, Enum):
    """Platforms Dialogflow can render rich messages for."""

    UNSPECIFIED = "PLATFORM_UNSPECIFIED"
    FACEBOOK = "FACEBOOK"
    SLACK = "SLACK"
    TELEGRAM = "TELEGRAM"
    KIK = "KIK"
    SKYPE = "SKYPE"
    LINE = "LINE"
    VIBER = "VIBER"
    ACTIONS_ON_GOOGLE = "ACTIONS_ON_GOOGLE"


SUPPORTED_RICH_MESSAGE_PLATFORMS: frozenset[Platform] = frozenset(
    platform for platform in Platform if platform is not Platform.UNSPECIFIED
)

# Lowercase names used by v1 messages and by both versions' request ``source``.
_V1_PLATFORM_NAMES: dict[Platform, str] = {
    Platform.FACEBOOK: "facebook",
    Platform.SLACK: "slack",
    Platform.TELEGRAM: "telegram",
    Platform.KIK: "kik",
    Platform.SKYPE: "skype",
    Platform.LINE: "line",
    Platform.VIBER: "viber",
    Platform.ACTIONS_ON_GOOGLE: "google",
}
_PLATFORMS_BY_SOURCE: dict[str, Platform] = {
    name: platform for platform, name in _V1_PLATFORM_NAMES.items()
}

PlatformTag = Union[Platform, str]


def v1_platform_name(platform: Platform) -> Optional[str]:
    """Lowercase v1 wire name, or None for the unspecified platform."""
    return _V1_PLATFORM_NAMES.get(platform)


def platform_from_source(source: Optional[str]) -> Optional[PlatformTag]:
    """
    Map a request ``source`` string onto a Platform.

    Both the lowercase source names (``"google"``, ``"slack"``) and the
    enum values (``"ACTIONS_ON_GOOGLE"``) are recognised. Unknown sources are
    returned unchanged so send-time validation can reject them.
    """
    if not source:
        return None
    if source in _PLATFORMS_BY_SOURCE:
        return _PLATFORMS_BY_SOURCE[source]
    try:
        return Platform(source)
    except ValueError:
        return source


def is_unspecified(platform: Optional[PlatformTag]) -> bool:
    return platform is None or platform == Platform.UNSPECIFIED


def is_supported_source(source: Optional[PlatformTag]) -> bool:
    """True if ``source`` is absent, unspecified or a supported platform."""
    if is_unspecified(source):
        return True
    return isinstance(source, Platform) and source in SUPPORTED_RICH_MESSAGE_PLATFORMS
