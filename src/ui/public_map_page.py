from typing import Dict, List, Optional
import pydeck as pdk
import streamlit as st
from clients.supabase_client import BackendError, SupabaseClient
from models.models import Cluster, PublicPost
from ui.chat_page import format_timestamp
from ui.net_action import net_action
from ui.Page import Page
from utils.constants import UNKNOWN_CITY, Keys, MapConstants
from utils.geo_utils import build_clusters, truncate_preview


def cluster_rows(clusters: List[Cluster]) -> List[Dict]:
    """Flatten clusters into the records the scatterplot layer reads."""
    rows = []
    for c in clusters:
        head = c.posts[0]
        count = len(c.posts)
        rows.append(
            {
                "key": c.key,
                "lat": c.lat,
                "lng": c.lng,
                "city": head.city or UNKNOWN_CITY,
                "preview": truncate_preview(head.content),
                "count": count,
                "count_label": f"{count} thoughts here" if count > 1 else "",
            }
        )
    return rows


class PublicMapPage(Page):
    """Anonymous public posts pinned to approximate places."""

    requires_auth = False

    def __init__(
        self,
        supabase_client: SupabaseClient,
        posts_limit: int = 300,
        cluster_decimals: int = 4,
        default_center: tuple = (52.2297, 21.0122),
        zoom: int = 3,
    ):
        self.supabase_client = supabase_client
        self.posts_limit = posts_limit
        self.cluster_decimals = cluster_decimals
        self.default_center = default_center
        self.zoom = zoom

    def _center(self, clusters: List[Cluster]):
        # newest cluster first, so this follows the latest post
        if clusters:
            return clusters[0].lat, clusters[0].lng
        return self.default_center

    def _deck(self, clusters: List[Cluster]) -> pdk.Deck:
        lat, lng = self._center(clusters)
        layer = pdk.Layer(
            "ScatterplotLayer",
            id=MapConstants.LAYER_ID.value,
            data=cluster_rows(clusters),
            get_position="[lng, lat]",
            get_radius=MapConstants.POINT_RADIUS_METERS.value,
            radius_min_pixels=MapConstants.POINT_MIN_RADIUS_PIXELS.value,
            radius_max_pixels=MapConstants.POINT_MAX_RADIUS_PIXELS.value,
            get_fill_color=MapConstants.FILL_COLOR.value,
            pickable=True,
        )
        return pdk.Deck(
            layers=[layer],
            initial_view_state=pdk.ViewState(latitude=lat, longitude=lng, zoom=self.zoom),
            tooltip={
                "html": "<small>{city}</small><br/><b>{preview}</b><br/><small>{count_label}</small>",
                "style": {"maxWidth": "240px", "whiteSpace": "pre-wrap"},
            },
        )

    def _selected_cluster(self, event, clusters: List[Cluster]) -> Optional[Cluster]:
        objects = (event.selection or {}).get("objects", {}) if event else {}
        picked = objects.get(MapConstants.LAYER_ID.value) or []
        if picked:
            st.session_state.selected_cluster_key = picked[0].get("key")
        key = st.session_state.selected_cluster_key
        return next((c for c in clusters if c.key == key), None)

    def _render_cluster(self, cluster: Cluster):
        with st.container(border=True):
            head = cluster.posts[0]
            st.subheader(head.city or UNKNOWN_CITY)
            for p in cluster.posts:
                st.caption(format_timestamp(p.created_at))
                st.markdown(p.content)

    def _delete_post(self, post_id: str):
        try:
            with net_action("Deleting post..."):
                self.supabase_client.delete_public_post(post_id)
        except BackendError as e:
            st.session_state.public_post_error = str(e)

    def _render_posts(self, posts: List[PublicPost]):
        st.subheader("Latest")
        if not posts:
            st.caption("No public posts yet. Be the first one ✨")
            return
        for p in posts:
            with st.container(border=True):
                st.caption(f"{p.city or UNKNOWN_CITY} • {format_timestamp(p.created_at)}")
                st.markdown(p.content)

    def _render_my_posts(self):
        with st.expander("Your public posts"):
            try:
                posts = self.supabase_client.list_my_public_posts()
            except BackendError as e:
                st.error(str(e))
                return
            if not posts:
                st.caption("You have not published anything yet.")
            for p in posts:
                text_col, del_col = st.columns([6, 1], vertical_alignment="center")
                text_col.markdown(f"**{p.city or UNKNOWN_CITY}** · {truncate_preview(p.content)}")
                del_col.button(
                    "",
                    icon=":material/delete:",
                    key=f"delete-post-{p.id}",
                    help="Remove from the public map",
                    on_click=self._delete_post,
                    args=(p.id,),
                )

    def render(self):
        st.title("Public map")
        st.caption("Anonymous thoughts pinned to places (approximate location).")

        if error := st.session_state.pop("public_post_error", None):
            st.error(error)

        try:
            with net_action("Loading public posts..."):
                posts = self.supabase_client.list_public_posts(self.posts_limit)
        except BackendError as e:
            st.error(str(e))
            posts = []

        clusters = build_clusters(posts, self.cluster_decimals)
        event = st.pydeck_chart(
            self._deck(clusters),
            on_select="rerun",
            selection_mode="single-object",
            key=Keys.MAP.value,
        )
        selected = self._selected_cluster(event, clusters)
        if selected:
            self._render_cluster(selected)

        if self.supabase_client.current_user_id():
            self._render_my_posts()
        self._render_posts(posts)
