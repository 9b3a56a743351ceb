from datetime import datetime, timezone
import streamlit as st
from clients.supabase_client import BackendError, SupabaseClient
from models.models import Message
from ui.net_action import net_action
from ui.Page import Page
from ui.publish_panel import PublishPanel
from utils.constants import Keys, Label
from utils.optimistic_utils import (
    append_optimistic,
    confirm_optimistic,
    discard_optimistic,
    is_temp_id,
    make_temp_id,
    remove_by_id,
    restore,
)


def format_timestamp(value: datetime) -> str:
    return value.astimezone().strftime("%Y-%m-%d %H:%M")


class ChatPage(Page):
    """Categories on the left, the active category's messages on the right."""

    def __init__(self, supabase_client: SupabaseClient, publish_panel: PublishPanel):
        self.supabase_client = supabase_client
        self.publish_panel = publish_panel

    # Loading

    def _load_categories(self):
        if st.session_state.categories_loaded:
            return
        with net_action("Loading your chats..."):
            categories = self.supabase_client.list_categories()
        st.session_state.categories = categories
        st.session_state.categories_loaded = True
        if categories and st.session_state.active_category_id is None:
            st.session_state.active_category_id = categories[0].id

    def _load_messages(self):
        active = st.session_state.active_category_id
        if active is None:
            st.session_state.messages = []
            st.session_state.messages_category_id = None
            return
        if st.session_state.messages_category_id == active:
            return
        with net_action("Loading messages..."):
            st.session_state.messages = self.supabase_client.list_messages(active)
        st.session_state.messages_category_id = active

    # Categories

    def _add_category(self):
        title = (st.session_state.get(Keys.NEW_CATEGORY.value) or "").strip()
        if not title:
            return
        try:
            with net_action("Creating category..."):
                category = self.supabase_client.create_category(title)
        except (BackendError, ValueError) as e:
            st.session_state.category_error = str(e)
            return
        st.session_state.categories = [*st.session_state.categories, category]
        st.session_state.active_category_id = category.id
        st.session_state[Keys.NEW_CATEGORY.value] = ""

    def _select_category(self, category_id: str):
        st.session_state.active_category_id = category_id
        st.session_state.publish_message = None

    def _delete_category(self, category_id: str):
        categories, removed = remove_by_id(st.session_state.categories, category_id)
        st.session_state.categories = categories
        try:
            with net_action("Deleting category..."):
                self.supabase_client.delete_category(category_id)
        except BackendError as e:
            st.session_state.categories = restore(st.session_state.categories, removed)
            st.session_state.category_error = str(e)
            return
        if st.session_state.active_category_id == category_id:
            st.session_state.active_category_id = categories[0].id if categories else None
            st.session_state.messages = []
            st.session_state.messages_category_id = None
            st.session_state.publish_message = None

    def _render_categories(self):
        with st.container(border=True):
            with st.form("new_category_form", clear_on_submit=False, border=False):
                input_col, add_col = st.columns([5, 1], vertical_alignment="bottom")
                input_col.text_input(
                    Label.NEW_CATEGORY.value,
                    key=Keys.NEW_CATEGORY.value,
                    label_visibility="collapsed",
                    placeholder=Label.NEW_CATEGORY.value,
                )
                add_col.form_submit_button("+", help=Label.ADD_CATEGORY.value, on_click=self._add_category)

            if error := st.session_state.pop("category_error", None):
                st.error(error)

            if not st.session_state.categories:
                st.caption("Create your first category. It will be your first chat.")
                return

            for c in st.session_state.categories:
                active = c.id == st.session_state.active_category_id
                title_col, del_col = st.columns([5, 1], vertical_alignment="center")
                title_col.button(
                    c.title,
                    key=f"category-{c.id}",
                    type="primary" if active else "secondary",
                    width="stretch",
                    on_click=self._select_category,
                    args=(c.id,),
                )
                del_col.button(
                    "",
                    icon=":material/delete:",
                    key=f"delete-category-{c.id}",
                    help="Delete category and its messages",
                    on_click=self._delete_category,
                    args=(c.id,),
                )

    # Messages

    def _send(self, content: str, user_id: str):
        content = content.strip()
        active = st.session_state.active_category_id
        if not content or not active:
            return

        optimistic = Message(
            id=make_temp_id(),
            content=content,
            category_id=active,
            created_at=datetime.now(timezone.utc),
            user_id=user_id,
        )
        st.session_state.messages = append_optimistic(st.session_state.messages, optimistic)
        bubble = st.empty()
        with bubble.container():
            self._render_message(optimistic)

        try:
            with net_action("Sending..."):
                saved = self.supabase_client.create_message(active, content)
        except (BackendError, ValueError) as e:
            st.session_state.messages = discard_optimistic(
                st.session_state.messages, optimistic.id
            )
            bubble.empty()
            st.error(str(e))
            return

        st.session_state.messages = confirm_optimistic(
            st.session_state.messages, optimistic.id, saved
        )
        st.rerun()

    def _delete_message(self, message_id: str):
        messages, removed = remove_by_id(st.session_state.messages, message_id)
        st.session_state.messages = messages
        try:
            with net_action("Deleting message..."):
                self.supabase_client.delete_message(message_id)
        except BackendError as e:
            st.session_state.messages = restore(st.session_state.messages, removed)
            st.session_state.message_error = str(e)
            return
        publishing = st.session_state.publish_message
        if publishing and publishing.id == message_id:
            st.session_state.publish_message = None

    def _start_publish(self, message: Message):
        st.session_state.publish_message = message

    def _render_message(self, m: Message):
        with st.chat_message("user", avatar=":material/edit_note:"):
            st.markdown(m.content)
            if is_temp_id(m.id):
                st.caption("Sending...")
                return
            time_col, publish_col, del_col = st.columns([6, 1, 1])
            time_col.caption(format_timestamp(m.created_at))
            publish_col.button(
                "",
                icon=":material/public:",
                key=f"publish-{m.id}",
                help="Publish anonymously on the public map",
                on_click=self._start_publish,
                args=(m,),
            )
            del_col.button(
                "",
                icon=":material/delete:",
                key=f"delete-message-{m.id}",
                help="Delete message",
                on_click=self._delete_message,
                args=(m.id,),
            )

    def _render_chat(self, user_id: str):
        active = next(
            (c for c in st.session_state.categories if c.id == st.session_state.active_category_id),
            None,
        )
        with st.container(border=True):
            st.caption("Chat")
            st.subheader(active.title if active else "Pick a category")

            if error := st.session_state.pop("message_error", None):
                st.error(error)

            if active and not st.session_state.messages:
                st.caption("Write your first message. Nobody receives it. This is your space.")

            for m in st.session_state.messages:
                self._render_message(m)

            if prompt := st.chat_input(Label.MESSAGE_INPUT.value, disabled=active is None):
                self._send(prompt, user_id)

        self.publish_panel.render(user_id)

    def render(self):
        user_id = self.supabase_client.current_user_id()
        st.title("Your chats with your feelings")
        st.caption("Write, \"send\", come back whenever you want.")
        try:
            self._load_categories()
            self._load_messages()
        except BackendError as e:
            st.error(str(e))
            return

        left, right = st.columns([4, 8])
        with left:
            self._render_categories()
        with right:
            self._render_chat(user_id)
