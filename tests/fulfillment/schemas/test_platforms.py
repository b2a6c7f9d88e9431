"""Tests for platform identifiers."""

from fulfillment.schemas.platforms import (
    SUPPORTED_RICH_MESSAGE_PLATFORMS,
    Platform,
    is_supported_source,
    platform_from_source,
    v1_platform_name,
)


def test_supported_platforms_exclude_unspecified():
    assert Platform.UNSPECIFIED not in SUPPORTED_RICH_MESSAGE_PLATFORMS
    assert len(SUPPORTED_RICH_MESSAGE_PLATFORMS) == 8
    assert Platform.ACTIONS_ON_GOOGLE in SUPPORTED_RICH_MESSAGE_PLATFORMS


def test_platform_from_source_lowercase_names():
    assert platform_from_source("google") is Platform.ACTIONS_ON_GOOGLE
    assert platform_from_source("slack") is Platform.SLACK
    assert platform_from_source("ACTIONS_ON_GOOGLE") is Platform.ACTIONS_ON_GOOGLE


def test_platform_from_source_unknown_kept_verbatim():
    assert platform_from_source("myspace") == "myspace"
    assert platform_from_source(None) is None
    assert platform_from_source("") is None


def test_is_supported_source():
    assert is_supported_source(None) is True
    assert is_supported_source(Platform.UNSPECIFIED) is True
    assert is_supported_source(Platform.LINE) is True
    assert is_supported_source("myspace") is False


def test_v1_platform_name():
    assert v1_platform_name(Platform.ACTIONS_ON_GOOGLE) == "google"
    assert v1_platform_name(Platform.UNSPECIFIED) is None
