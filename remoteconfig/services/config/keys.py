"""
Known Config Keys

The catalog of keys the showcase reads, each with the type the
presentation layer expects it to hold.
"""

from .values import ValueType

# Basic Configuration
WELCOME_MESSAGE = "welcome_message"
FEATURE_FLAG_ENABLED = "feature_flag_enabled"
API_BASE_URL = "api_base_url"
APP_VERSION = "app_version"
MAX_RETRY_ATTEMPTS = "max_retry_attempts"
CACHE_DURATION_HOURS = "cache_duration_hours"
ENABLE_DEBUG_LOGGING = "enable_debug_logging"

# Dynamic Theme & UI
APP_THEME = "app_theme"
PRIMARY_COLOR = "primary_color"
SHOW_PREMIUM_FEATURES = "show_premium_features"
ENABLE_ANIMATIONS = "enable_animations"

# A/B Testing
BUTTON_STYLE = "button_style"
ONBOARDING_VARIANT = "onboarding_variant"
CHECKOUT_FLOW = "checkout_flow"

# Emergency & Notifications
EMERGENCY_MESSAGE = "emergency_message"
MAINTENANCE_MODE = "maintenance_mode"
SHOW_ANNOUNCEMENT = "show_announcement"
ANNOUNCEMENT_TEXT = "announcement_text"

# Dynamic Content
FEATURED_PRODUCT = "featured_product"
DISCOUNT_PERCENTAGE = "discount_percentage"
MAX_ITEMS_PER_PAGE = "max_items_per_page"

# Performance & Limits
API_TIMEOUT_SECONDS = "api_timeout_seconds"
MAX_FILE_UPLOAD_MB = "max_file_upload_mb"
ENABLE_ANALYTICS = "enable_analytics"


KEY_TYPES: dict[str, ValueType] = {
    WELCOME_MESSAGE: ValueType.STRING,
    FEATURE_FLAG_ENABLED: ValueType.BOOLEAN,
    API_BASE_URL: ValueType.STRING,
    APP_VERSION: ValueType.STRING,
    MAX_RETRY_ATTEMPTS: ValueType.INTEGER,
    CACHE_DURATION_HOURS: ValueType.INTEGER,
    ENABLE_DEBUG_LOGGING: ValueType.BOOLEAN,
    APP_THEME: ValueType.STRING,
    PRIMARY_COLOR: ValueType.STRING,
    SHOW_PREMIUM_FEATURES: ValueType.BOOLEAN,
    ENABLE_ANIMATIONS: ValueType.BOOLEAN,
    BUTTON_STYLE: ValueType.STRING,
    ONBOARDING_VARIANT: ValueType.STRING,
    CHECKOUT_FLOW: ValueType.STRING,
    EMERGENCY_MESSAGE: ValueType.STRING,
    MAINTENANCE_MODE: ValueType.BOOLEAN,
    SHOW_ANNOUNCEMENT: ValueType.BOOLEAN,
    ANNOUNCEMENT_TEXT: ValueType.STRING,
    FEATURED_PRODUCT: ValueType.STRING,
    DISCOUNT_PERCENTAGE: ValueType.INTEGER,
    MAX_ITEMS_PER_PAGE: ValueType.INTEGER,
    API_TIMEOUT_SECONDS: ValueType.INTEGER,
    MAX_FILE_UPLOAD_MB: ValueType.INTEGER,
    ENABLE_ANALYTICS: ValueType.BOOLEAN,
}

KNOWN_KEYS: tuple[str, ...] = tuple(KEY_TYPES)

# Keys dumped to the log after values are activated
DIAGNOSTIC_KEYS: tuple[str, ...] = (
    WELCOME_MESSAGE,
    FEATURE_FLAG_ENABLED,
    API_BASE_URL,
    APP_VERSION,
    MAX_RETRY_ATTEMPTS,
    CACHE_DURATION_HOURS,
    ENABLE_DEBUG_LOGGING,
)
