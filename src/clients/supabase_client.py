import functools
import logging
from datetime import datetime
from typing import Any, Dict, List, MutableMapping, Optional
import streamlit as st
from supabase import AuthError, Client, PostgrestAPIError, create_client
from models.models import (
    Category,
    CategoryInput,
    Message,
    MessageInput,
    NotificationRow,
    PublicPost,
    PublicPostInput,
)
from utils.constants import SESSION_KEYS, Tables

logger = logging.getLogger(__name__)


class BackendError(Exception):
    """A call to the hosted backend failed. The message is the backend's own."""


def surface_backend_errors(fn):
    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except (PostgrestAPIError, AuthError) as e:
            message = getattr(e, "message", None) or str(e)
            logger.warning("%s failed: %s", fn.__name__, message)
            raise BackendError(message) from e

    return wrapper


class SupabaseClient:
    """Auth and table access for one browser session.

    The underlying client keeps auth state, so it is built per session and
    the tokens are kept in ``session_store`` (Streamlit session state by
    default) across script reruns.
    """

    def __init__(
        self,
        url: str,
        key: str,
        session_store: Optional[MutableMapping[str, Any]] = None,
    ):
        assert url and key, "Supabase URL or anon key not found."
        self.client: Client = create_client(url, key)
        self.session_store = (
            session_store if session_store is not None else st.session_state
        )
        self._restored_user_id: Optional[str] = None

    # Auth

    def _store_session(self, session) -> str:
        self.session_store["access_token"] = session.access_token
        self.session_store["refresh_token"] = session.refresh_token
        self.session_store["user_id"] = session.user.id
        self._restored_user_id = session.user.id
        return session.user.id

    def _clear_session(self):
        for k in SESSION_KEYS:
            self.session_store[k] = None
        self._restored_user_id = None

    @surface_backend_errors
    def sign_up(self, email: str, password: str) -> Optional[str]:
        response = self.client.auth.sign_up({"email": email, "password": password})
        logger.info("Signed up %s", email)
        return response.user.id if response.user else None

    @surface_backend_errors
    def sign_in(self, email: str, password: str) -> str:
        response = self.client.auth.sign_in_with_password(
            {"email": email, "password": password}
        )
        if not response.session:
            raise BackendError("Sign-in did not return a session.")
        return self._store_session(response.session)

    def sign_out(self):
        try:
            self.client.auth.sign_out()
        except AuthError as e:
            logger.warning("Sign-out failed, clearing local session anyway: %s", e)
        finally:
            self._clear_session()

    def current_user_id(self) -> Optional[str]:
        """Re-apply the stored session; a stale one is cleared."""
        if self._restored_user_id:
            return self._restored_user_id
        access = self.session_store.get("access_token")
        refresh = self.session_store.get("refresh_token")
        if not access or not refresh:
            return None
        try:
            response = self.client.auth.set_session(access, refresh)
        except AuthError as e:
            logger.info("Stored session rejected: %s", e)
            self._clear_session()
            return None
        if not response.session:
            self._clear_session()
            return None
        return self._store_session(response.session)

    def _require_user(self) -> str:
        user_id = self.current_user_id()
        if not user_id:
            raise BackendError("You are signed out. Please sign in again.")
        return user_id

    # Tables

    def _table(self, table: Tables):
        return self.client.table(table.value)

    @staticmethod
    def _first_row(response: Any, what: str) -> Dict[str, Any]:
        if not response.data:
            raise BackendError(f"Saving the {what} returned no row.")
        return response.data[0]

    @surface_backend_errors
    def list_categories(self) -> List[Category]:
        user_id = self._require_user()
        response = (
            self._table(Tables.CATEGORIES)
            .select("*")
            .eq("user_id", user_id)
            .order("created_at")
            .execute()
        )
        return [Category.model_validate(row) for row in response.data]

    @surface_backend_errors
    def create_category(self, title: str) -> Category:
        payload = CategoryInput(title=title, user_id=self._require_user())
        response = self._table(Tables.CATEGORIES).insert(payload.model_dump()).execute()
        return Category.model_validate(self._first_row(response, "category"))

    @surface_backend_errors
    def delete_category(self, category_id: str):
        # messages go with it through the foreign key cascade
        user_id = self._require_user()
        self._table(Tables.CATEGORIES).delete().eq("id", category_id).eq(
            "user_id", user_id
        ).execute()

    @surface_backend_errors
    def list_messages(self, category_id: str) -> List[Message]:
        self._require_user()
        response = (
            self._table(Tables.MESSAGES)
            .select("*")
            .eq("category_id", category_id)
            .order("created_at")
            .execute()
        )
        return [Message.model_validate(row) for row in response.data]

    @surface_backend_errors
    def create_message(self, category_id: str, content: str) -> Message:
        payload = MessageInput(
            content=content, category_id=category_id, user_id=self._require_user()
        )
        response = self._table(Tables.MESSAGES).insert(payload.model_dump()).execute()
        return Message.model_validate(self._first_row(response, "message"))

    @surface_backend_errors
    def delete_message(self, message_id: str):
        user_id = self._require_user()
        self._table(Tables.MESSAGES).delete().eq("id", message_id).eq(
            "user_id", user_id
        ).execute()

    @surface_backend_errors
    def list_public_posts(self, limit: int = 300) -> List[PublicPost]:
        response = (
            self._table(Tables.PUBLIC_POSTS)
            .select("*")
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [PublicPost.model_validate(row) for row in response.data]

    @surface_backend_errors
    def list_my_public_posts(self) -> List[PublicPost]:
        user_id = self._require_user()
        response = (
            self._table(Tables.PUBLIC_POSTS)
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .execute()
        )
        return [PublicPost.model_validate(row) for row in response.data]

    @surface_backend_errors
    def create_public_post(self, payload: PublicPostInput) -> PublicPost:
        if payload.user_id != self._require_user():
            raise BackendError("Posts can only be published as yourself.")
        response = (
            self._table(Tables.PUBLIC_POSTS).insert(payload.model_dump()).execute()
        )
        return PublicPost.model_validate(self._first_row(response, "public post"))

    @surface_backend_errors
    def delete_public_post(self, post_id: str):
        user_id = self._require_user()
        self._table(Tables.PUBLIC_POSTS).delete().eq("id", post_id).eq(
            "user_id", user_id
        ).execute()

    @surface_backend_errors
    def list_notifications(
        self, since: Optional[datetime] = None
    ) -> List[NotificationRow]:
        query = (
            self._table(Tables.NOTIFICATIONS)
            .select("*")
            .eq("recipient_user_id", self._require_user())
        )
        if since is not None:
            query = query.gt("created_at", since.isoformat())
        response = query.order("created_at").execute()
        return [NotificationRow.model_validate(row) for row in response.data]
