import logging
from datetime import datetime, timezone
from typing import List
import streamlit as st
from clients.supabase_client import BackendError, SupabaseClient
from models.models import NotificationRow
from utils.geo_utils import truncate_preview

logger = logging.getLogger(__name__)


def notification_text(n: NotificationRow) -> str:
    return (
        f"Someone {n.distance_km:.1f} km away wrote something similar "
        f"({n.similarity:.0%}): {truncate_preview(n.preview, 80)}"
    )


class NotificationFeed:
    """Polls `notifications` for rows addressed to the signed-in user.

    Rows are produced elsewhere. Only rows newer than the first poll of the
    session are shown, each once, as a toast.
    """

    def __init__(self, supabase_client: SupabaseClient, poll_seconds: int = 20):
        self.supabase_client = supabase_client
        self.poll_seconds = poll_seconds

    def fetch_new(self) -> List[NotificationRow]:
        since = st.session_state.last_notification_at
        if since is None:
            st.session_state.last_notification_at = datetime.now(timezone.utc)
            return []
        rows = self.supabase_client.list_notifications(since)
        if rows:
            st.session_state.last_notification_at = rows[-1].created_at
        return rows

    def _poll(self):
        try:
            rows = self.fetch_new()
        except BackendError as e:
            # a broken feed must not take the page down with it
            logger.warning("Notification poll failed: %s", e)
            return
        for n in rows:
            st.toast(notification_text(n), icon=":material/near_me:")

    def render(self):
        st.fragment(self._poll, run_every=self.poll_seconds)()
