"""
Unit tests for the showcase card render functions.
"""

import pytest

from remoteconfig.presentation.cards import (
    DEFAULT_PRIMARY_COLOR,
    format_cards,
    parse_color,
    render_showcase,
)
from remoteconfig.services.config.accessors import RemoteConfig
from remoteconfig.services.config.store import ConfigStore


@pytest.fixture
def showcase(bundled_defaults) -> RemoteConfig:
    return RemoteConfig(ConfigStore.initialize(bundled_defaults))


def kinds(cards) -> list[str]:
    return [card.kind for card in cards]


def by_kind(cards, kind):
    return next(card for card in cards if card.kind == kind)


class TestParseColor:
    @pytest.mark.parametrize("raw,expected", [
        ("#ff5722", "#FF5722"),
        ("#80FF5722", "#80FF5722"),
        ("  #123abc ", "#123ABC"),
        ("red", "#FF0000"),
        ("Blue", "#0000FF"),
        (" lightGrey ", "#CCCCCC"),
        ("teal", "#008080"),
    ])
    def test_valid(self, raw, expected) -> None:
        assert parse_color(raw) == expected

    @pytest.mark.parametrize("raw", ["", "notacolor", "#red", "#12345", "FF5722", "#GGGGGG"])
    def test_invalid_falls_back(self, raw) -> None:
        assert parse_color(raw) == DEFAULT_PRIMARY_COLOR


class TestRenderShowcase:
    def test_defaults_hide_banners(self, showcase) -> None:
        cards = render_showcase(showcase)

        assert kinds(cards) == [
            "header",
            "theme",
            "ab_testing",
            "feature_flags",
            "dynamic_content",
            "performance",
            "configuration",
        ]
        assert "discount_badge" not in by_kind(cards, "dynamic_content").fields

    def test_banners_follow_values(self, showcase) -> None:
        showcase.store.replace_all({
            "emergency_message": "Service degraded",
            "maintenance_mode": True,
            "show_announcement": True,
            "announcement_text": "New features available!",
        })

        cards = render_showcase(showcase)

        assert kinds(cards)[:4] == ["header", "emergency", "maintenance", "announcement"]
        assert by_kind(cards, "emergency").fields["message"] == "Service degraded"
        assert by_kind(cards, "announcement").fields["text"] == "New features available!"

    def test_rerender_reflects_refreshed_values(self, showcase) -> None:
        before = by_kind(render_showcase(showcase), "theme")
        showcase.store.replace_all({"primary_color": "#ff5722", "app_theme": "dark"})
        after = by_kind(render_showcase(showcase), "theme")

        assert before.color == "#2196F3"
        assert after.color == "#FF5722"
        assert after.fields["theme"] == "dark"

    def test_bad_primary_color_uses_fallback(self, showcase) -> None:
        showcase.store.replace_all({"primary_color": "not-a-color"})
        assert by_kind(render_showcase(showcase), "header").color == DEFAULT_PRIMARY_COLOR

    def test_named_primary_color(self, showcase) -> None:
        showcase.store.replace_all({"primary_color": "Purple"})
        assert by_kind(render_showcase(showcase), "header").color == "#800080"

    def test_discount_badge(self, showcase) -> None:
        showcase.store.replace_all({"discount_percentage": 25, "enable_animations": False})

        badge = by_kind(render_showcase(showcase), "dynamic_content").fields["discount_badge"]

        assert badge["text"] == "25% OFF!"
        assert badge["pulse"] is False

    def test_performance_units(self, showcase) -> None:
        showcase.store.replace_all({"api_timeout_seconds": 15})

        fields = by_kind(render_showcase(showcase), "performance").fields

        assert fields == {"API Timeout": "15s", "Max Upload": "10MB", "Cache Duration": "24h"}

    def test_renders_with_empty_store(self) -> None:
        cards = render_showcase(RemoteConfig(ConfigStore.initialize({})))

        assert by_kind(cards, "header").color == DEFAULT_PRIMARY_COLOR
        assert by_kind(cards, "configuration").fields["Max Retries"] == "0"

    def test_format_cards(self, showcase) -> None:
        text = format_cards(render_showcase(showcase))

        assert "Feature Flags" in text
        assert "analytics: Enabled" in text
        assert "premium_features: Disabled" in text
