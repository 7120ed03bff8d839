"""
Showcase Cards

Stateless render functions turning the current config values into the
cards of the showcase screen. Each call reads the accessors afresh, so
rendering after an activation reflects the new values.
"""

import re
from dataclasses import asdict, dataclass, field
from typing import Any

from remoteconfig.services.config import keys
from remoteconfig.services.config.accessors import RemoteConfig

DEFAULT_PRIMARY_COLOR = "#2196F3"
EMERGENCY_COLOR = "#F44336"
MAINTENANCE_COLOR = "#FF9800"
ANNOUNCEMENT_COLOR = "#4CAF50"
DISCOUNT_COLOR = "#FF5722"

_HEX_COLOR = re.compile(r"^#(?:[0-9A-Fa-f]{6}|[0-9A-Fa-f]{8})$")

# Names understood by the Android color parser
NAMED_COLORS = {
    "black": "#000000",
    "darkgray": "#444444",
    "darkgrey": "#444444",
    "gray": "#888888",
    "grey": "#888888",
    "lightgray": "#CCCCCC",
    "lightgrey": "#CCCCCC",
    "white": "#FFFFFF",
    "red": "#FF0000",
    "green": "#00FF00",
    "blue": "#0000FF",
    "yellow": "#FFFF00",
    "cyan": "#00FFFF",
    "magenta": "#FF00FF",
    "aqua": "#00FFFF",
    "fuchsia": "#FF00FF",
    "lime": "#00FF00",
    "maroon": "#800000",
    "navy": "#000080",
    "olive": "#808000",
    "purple": "#800080",
    "silver": "#C0C0C0",
    "teal": "#008080",
}


@dataclass
class Card:
    """One rendered card"""
    kind: str
    title: str
    color: str | None = None
    animated: bool = False
    fields: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return asdict(self)


def parse_color(value: str, fallback: str = DEFAULT_PRIMARY_COLOR) -> str:
    """
    Normalize a color string to upper-case hex, or return fallback.

    Accepts #RRGGBB, #AARRGGBB and the named colors in NAMED_COLORS
    (case-insensitive).
    """
    text = value.strip()
    named = NAMED_COLORS.get(text.lower())
    if named is not None:
        return named
    if not _HEX_COLOR.match(text):
        return fallback
    return text.upper()


def header_card(config: RemoteConfig) -> Card:
    return Card(
        kind="header",
        title="Remote Config",
        color=parse_color(config.get_string(keys.PRIMARY_COLOR)),
        fields={
            "subtitle": "Live Demo Showcase",
            "welcome_message": config.get_string(keys.WELCOME_MESSAGE),
        },
    )


def emergency_banner(config: RemoteConfig) -> Card | None:
    message = config.get_string(keys.EMERGENCY_MESSAGE)
    if not message:
        return None
    return Card(
        kind="emergency",
        title="Emergency Alert",
        color=EMERGENCY_COLOR,
        animated=config.get_boolean(keys.ENABLE_ANIMATIONS),
        fields={"message": message},
    )


def maintenance_banner(config: RemoteConfig) -> Card | None:
    if not config.get_boolean(keys.MAINTENANCE_MODE):
        return None
    return Card(
        kind="maintenance",
        title="Maintenance Mode",
        color=MAINTENANCE_COLOR,
        animated=config.get_boolean(keys.ENABLE_ANIMATIONS),
        fields={"message": "Some features may be temporarily unavailable"},
    )


def announcement_banner(config: RemoteConfig) -> Card | None:
    if not config.get_boolean(keys.SHOW_ANNOUNCEMENT):
        return None
    return Card(
        kind="announcement",
        title="Announcement",
        color=ANNOUNCEMENT_COLOR,
        animated=config.get_boolean(keys.ENABLE_ANIMATIONS),
        fields={"text": config.get_string(keys.ANNOUNCEMENT_TEXT)},
    )


def theme_card(config: RemoteConfig) -> Card:
    return Card(
        kind="theme",
        title="Dynamic Theme Control",
        color=parse_color(config.get_string(keys.PRIMARY_COLOR)),
        animated=config.get_boolean(keys.ENABLE_ANIMATIONS),
        fields={"theme": config.get_string(keys.APP_THEME)},
    )


def ab_testing_card(config: RemoteConfig) -> Card:
    return Card(
        kind="ab_testing",
        title="A/B Testing",
        animated=config.get_boolean(keys.ENABLE_ANIMATIONS),
        fields={
            "button_style": config.get_string(keys.BUTTON_STYLE),
            "onboarding_variant": config.get_string(keys.ONBOARDING_VARIANT),
            "checkout_flow": config.get_string(keys.CHECKOUT_FLOW),
        },
    )


def feature_flags_card(config: RemoteConfig) -> Card:
    return Card(
        kind="feature_flags",
        title="Feature Flags",
        animated=config.get_boolean(keys.ENABLE_ANIMATIONS),
        fields={
            "premium_features": config.get_boolean(keys.SHOW_PREMIUM_FEATURES),
            "animations": config.get_boolean(keys.ENABLE_ANIMATIONS),
            "analytics": config.get_boolean(keys.ENABLE_ANALYTICS),
            "feature_flag": config.get_boolean(keys.FEATURE_FLAG_ENABLED),
        },
    )


def dynamic_content_card(config: RemoteConfig) -> Card:
    discount = config.get_integer(keys.DISCOUNT_PERCENTAGE)
    animations = config.get_boolean(keys.ENABLE_ANIMATIONS)

    fields: dict[str, Any] = {
        "featured_product": config.get_string(keys.FEATURED_PRODUCT),
        "max_items_per_page": config.get_integer(keys.MAX_ITEMS_PER_PAGE),
    }
    if discount > 0:
        fields["discount_badge"] = {
            "text": f"{discount}% OFF!",
            "color": DISCOUNT_COLOR,
            "pulse": animations,
        }

    return Card(
        kind="dynamic_content",
        title="Dynamic Content",
        animated=animations,
        fields=fields,
    )


def performance_card(config: RemoteConfig) -> Card:
    return Card(
        kind="performance",
        title="Performance Metrics",
        fields={
            "API Timeout": f"{config.get_integer(keys.API_TIMEOUT_SECONDS)}s",
            "Max Upload": f"{config.get_integer(keys.MAX_FILE_UPLOAD_MB)}MB",
            "Cache Duration": f"{config.get_integer(keys.CACHE_DURATION_HOURS)}h",
        },
    )


def configuration_values_card(config: RemoteConfig) -> Card:
    return Card(
        kind="configuration",
        title="Configuration Values",
        fields={
            "Welcome Message": config.get_string(keys.WELCOME_MESSAGE),
            "API URL": config.get_string(keys.API_BASE_URL),
            "App Version": config.get_string(keys.APP_VERSION),
            "Max Retries": str(config.get_integer(keys.MAX_RETRY_ATTEMPTS)),
        },
    )


def render_showcase(config: RemoteConfig) -> list[Card]:
    """Render every card in screen order, skipping hidden banners"""
    cards = [
        header_card(config),
        emergency_banner(config),
        maintenance_banner(config),
        announcement_banner(config),
        theme_card(config),
        ab_testing_card(config),
        feature_flags_card(config),
        dynamic_content_card(config),
        performance_card(config),
        configuration_values_card(config),
    ]
    return [card for card in cards if card is not None]


def format_cards(cards: list[Card]) -> str:
    """Plain-text rendering for the terminal"""
    lines: list[str] = []
    for card in cards:
        heading = card.title if not card.color else f"{card.title} [{card.color}]"
        lines.append(heading)
        lines.append("-" * len(heading))
        for name, value in card.fields.items():
            if isinstance(value, dict):
                value = value.get("text", value)
            elif isinstance(value, bool):
                value = "Enabled" if value else "Disabled"
            lines.append(f"  {name}: {value}")
        lines.append("")
    return "\n".join(lines)
