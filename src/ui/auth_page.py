import streamlit as st
from clients.supabase_client import BackendError, SupabaseClient
from ui.net_action import net_action
from ui.Page import Page
from utils.constants import MIN_PASSWORD_LENGTH, AuthMode, Keys, Label


class AuthPage(Page):
    """Sign-up / sign-in form shown while there is no session."""

    requires_auth = False

    def __init__(self, supabase_client: SupabaseClient):
        self.supabase_client = supabase_client

    def _submit(self):
        email = (st.session_state.get(Keys.EMAIL.value) or "").strip()
        password = st.session_state.get(Keys.PASSWORD.value) or ""
        st.session_state.auth_info = None

        if not email or not password:
            st.session_state.auth_info = "Email and password are required."
            return
        if len(password) < MIN_PASSWORD_LENGTH:
            st.session_state.auth_info = (
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters."
            )
            return

        try:
            if st.session_state.auth_mode == AuthMode.SIGN_UP.value:
                with net_action("Creating account..."):
                    self.supabase_client.sign_up(email, password)
                st.session_state.auth_info = "Account created ✅ Now sign in."
                st.session_state.auth_mode = AuthMode.SIGN_IN.value
            else:
                with net_action("Signing in..."):
                    self.supabase_client.sign_in(email, password)
        except BackendError as e:
            st.session_state.auth_info = str(e)

    def render(self):
        st.title("nevermind")
        st.caption("Sign up & log in")

        st.radio(
            "Mode",
            (AuthMode.SIGN_UP.value, AuthMode.SIGN_IN.value),
            format_func=lambda x: {
                AuthMode.SIGN_UP.value: "Sign up",
                AuthMode.SIGN_IN.value: "Sign in",
            }[x],
            key="auth_mode",
            horizontal=True,
            label_visibility="collapsed",
        )

        signing_up = st.session_state.auth_mode == AuthMode.SIGN_UP.value
        with st.form("auth_form"):
            st.text_input(Label.EMAIL.value, key=Keys.EMAIL.value)
            st.text_input(Label.PASSWORD.value, type="password", key=Keys.PASSWORD.value)
            st.form_submit_button(
                Label.SUBMIT_SIGN_UP.value if signing_up else Label.SUBMIT_SIGN_IN.value,
                type="primary",
                on_click=self._submit,
            )

        if st.session_state.auth_info:
            st.info(st.session_state.auth_info)
