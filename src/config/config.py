import os
from dataclasses import dataclass

import streamlit as st


def load_env_vars():
    """Copy Streamlit secrets into the environment without overriding it."""
    try:
        secrets = dict(st.secrets.items())
    except FileNotFoundError:
        # no secrets.toml, plain environment variables only
        secrets = {}
    for k, v in secrets.items():
        os.environ.setdefault(k, str(v))


@dataclass(frozen=True)
class Settings:
    supabase_url: str
    supabase_anon_key: str
    public_posts_limit: int
    location_decimals: int
    cluster_decimals: int
    map_default_lat: float
    map_default_lng: float
    map_zoom: int
    notifications_poll_seconds: int
    log_level: str

    def __init__(self):
        load_env_vars()
        object.__setattr__(
            self, "supabase_url", os.getenv("SUPABASE_URL", "").strip()
        )
        object.__setattr__(
            self, "supabase_anon_key", os.getenv("SUPABASE_ANON_KEY", "").strip()
        )
        object.__setattr__(
            self,
            "public_posts_limit",
            int(os.getenv("PUBLIC_POSTS_LIMIT", "300").strip()),
        )
        object.__setattr__(
            self, "location_decimals", int(os.getenv("LOCATION_DECIMALS", "2").strip())
        )
        object.__setattr__(
            self, "cluster_decimals", int(os.getenv("CLUSTER_DECIMALS", "4").strip())
        )
        object.__setattr__(
            self, "map_default_lat", float(os.getenv("MAP_DEFAULT_LAT", "52.2297"))
        )
        object.__setattr__(
            self, "map_default_lng", float(os.getenv("MAP_DEFAULT_LNG", "21.0122"))
        )
        object.__setattr__(self, "map_zoom", int(os.getenv("MAP_ZOOM", "3").strip()))
        object.__setattr__(
            self,
            "notifications_poll_seconds",
            int(os.getenv("NOTIFICATIONS_POLL_SECONDS", "20").strip()),
        )
        object.__setattr__(
            self, "log_level", os.getenv("LOG_LEVEL", "INFO").strip().upper()
        )


SETTINGS = Settings()
