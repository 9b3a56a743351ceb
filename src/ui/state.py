import streamlit as st
from utils.constants import STATE_KEYS, AuthMode


def _defaults():
    return {
        "access_token": None,
        "refresh_token": None,
        "user_id": None,
        "auth_mode": AuthMode.SIGN_UP.value,
        "auth_info": None,
        "categories": [],
        "categories_loaded": False,
        "active_category_id": None,
        "messages": [],
        "messages_category_id": None,
        "publish_message": None,
        "last_notification_at": None,
        "selected_cluster_key": None,
    }


def ensure_state():
    """Ensure default state values exist for this browser session."""
    for key, value in _defaults().items():
        st.session_state.setdefault(key, value)


def reset_state():
    """Drop everything tied to the signed-in user, e.g. after sign-out."""
    defaults = _defaults()
    for key in STATE_KEYS:
        st.session_state[key] = defaults[key]
    st.session_state.auth_mode = AuthMode.SIGN_IN.value
    st.session_state.auth_info = None
