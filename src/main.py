import streamlit as st
from config.config import SETTINGS
from ui.state import ensure_state, reset_state
from utils.constants import Label, Pages
from utils.logging import setup_logging
from utils.styling import load_custom_css
from di.container import Container


def _container() -> Container:
    # one container per browser session: the backend client holds its auth state
    if "container" not in st.session_state:
        st.session_state.container = Container()
    return st.session_state.container


def _sign_out(container: Container):
    container.supabase_client().sign_out()
    reset_state()


def main():
    st.set_page_config(page_title="nevermind", page_icon=":material/edit_note:")
    setup_logging(SETTINGS.log_level)
    ensure_state()
    load_custom_css()
    container = _container()
    user_id = container.supabase_client().current_user_id()

    home = Pages.CHATS if user_id else Pages.AUTH
    st.sidebar.title("nevermind")
    selection = st.sidebar.radio(
        "Navigation",
        (home.value["key"], Pages.PUBLIC_MAP.value["key"]),
        format_func=lambda x: {
            Pages.AUTH.value["key"]: Pages.AUTH.value["title"],
            Pages.CHATS.value["key"]: Pages.CHATS.value["title"],
            Pages.PUBLIC_MAP.value["key"]: Pages.PUBLIC_MAP.value["title"],
        }[x],
        label_visibility="hidden",
    )

    if user_id:
        st.sidebar.button(Label.SIGN_OUT.value, on_click=_sign_out, args=(container,))
        container.notification_feed().render()

    if selection == Pages.PUBLIC_MAP.value["key"]:
        page = container.public_map_page()
    elif user_id:
        page = container.chat_page()
    else:
        page = container.auth_page()

    if page.requires_auth and not user_id:
        page = container.auth_page()
    page.render()


if __name__ == "__main__":
    main()
