from enum import Enum

OPTIMISTIC_ID_PREFIX = "optimistic-"
PREVIEW_MAX_CHARS = 120
MIN_PASSWORD_LENGTH = 8
UNKNOWN_CITY = "Unknown city"

SESSION_KEYS = [
    "access_token",
    "refresh_token",
    "user_id",
]
STATE_KEYS = SESSION_KEYS + [
    "auth_mode",
    "auth_info",
    "categories",
    "categories_loaded",
    "active_category_id",
    "messages",
    "messages_category_id",
    "publish_message",
    "last_notification_at",
    "selected_cluster_key",
]


class Tables(Enum):
    CATEGORIES = "categories"
    MESSAGES = "messages"
    PUBLIC_POSTS = "public_posts"
    NOTIFICATIONS = "notifications"


class AuthMode(Enum):
    SIGN_UP = "signup"
    SIGN_IN = "login"


class Label(Enum):
    EMAIL = "Email"
    PASSWORD = "Password (min. 8 characters)"
    NEW_CATEGORY = "New category (e.g. longing)"
    ADD_CATEGORY = "Add"
    MESSAGE_INPUT = "Write a message..."
    CITY = "City (optional)"
    PUBLISH = "Publish"
    CANCEL = "Cancel"
    SIGN_OUT = "Sign out"
    SUBMIT_SIGN_UP = "Create account"
    SUBMIT_SIGN_IN = "Sign in"


class Keys(Enum):
    EMAIL = "auth_email"
    PASSWORD = "auth_password"
    NEW_CATEGORY = "new_category_title"
    CITY = "publish_city"
    GEOLOCATION = "publish_geolocation"
    MAP = "public_map"


class MapConstants(Enum):
    LAYER_ID = "public-posts"
    POINT_RADIUS_METERS = 1500
    POINT_MIN_RADIUS_PIXELS = 6
    POINT_MAX_RADIUS_PIXELS = 30
    FILL_COLOR = [107, 70, 50, 200]


class Pages(Enum):
    AUTH = {
        "key": "auth",
        "title": ":material/login: Sign in",
    }
    CHATS = {
        "key": "chats",
        "title": ":material/forum: Your chats",
    }
    PUBLIC_MAP = {
        "key": "public",
        "title": ":material/map: Public map",
    }
