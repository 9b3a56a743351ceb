import logging
from typing import Any, Dict, Optional
import streamlit as st
from streamlit_js_eval import get_geolocation
from clients.supabase_client import BackendError
from ui.net_action import net_action
from utils.constants import Keys, Label
from utils.geo_utils import round_location, truncate_preview
from workflows.publish_workflow import PublishWorkflow

logger = logging.getLogger(__name__)


def read_geolocation(reading: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Normalise a browser geolocation reading.

    Returns ``{"pending": True}`` while the browser has not answered yet,
    ``{"error": str}`` when it refused or failed, or ``{"lat", "lng"}``.
    """
    if reading is None:
        return {"pending": True}
    if reading.get("error"):
        error = reading["error"]
        message = error.get("message") if isinstance(error, dict) else str(error)
        return {"error": message or "Location unavailable."}
    coords = reading.get("coords") or {}
    lat, lng = coords.get("latitude"), coords.get("longitude")
    if lat is None or lng is None:
        return {"error": "Location unavailable."}
    return {"lat": lat, "lng": lng}


class PublishPanel:
    """Inline panel to republish one message on the public map."""

    def __init__(self, publish_workflow: PublishWorkflow, location_decimals: int = 2):
        self.publish_workflow = publish_workflow
        self.location_decimals = location_decimals

    def _close(self):
        st.session_state.publish_message = None

    def render(self, user_id: str):
        message = st.session_state.publish_message
        if not message:
            return

        with st.container(border=True):
            st.subheader("Publish anonymously")
            st.markdown(f"> {truncate_preview(message.content)}")

            location = read_geolocation(
                get_geolocation(component_key=Keys.GEOLOCATION.value)
            )
            if location.get("pending"):
                st.caption("Waiting for your browser to share an approximate location...")
                st.button(Label.CANCEL.value, on_click=self._close, key="publish_cancel")
                return
            if location.get("error"):
                st.error(location["error"])
                self._close()
                return

            try:
                lat, lng = round_location(
                    location["lat"], location["lng"], self.location_decimals
                )
            except ValueError as e:
                st.error(str(e))
                self._close()
                return

            st.write(f"Approximate location: {lat:.2f}, {lng:.2f} (about 1 km)")
            city = st.text_input(Label.CITY.value, key=Keys.CITY.value)

            publish_col, cancel_col = st.columns(2)
            if publish_col.button(Label.PUBLISH.value, type="primary", key="publish_confirm"):
                try:
                    with net_action("Publishing..."):
                        output = self.publish_workflow.run(
                            {
                                "message": message,
                                "user_id": user_id,
                                "lat": lat,
                                "lng": lng,
                                "city": city,
                            }
                        )
                    self._close()
                    st.success(
                        f"Published near {output['post'].city or 'you'}. "
                        "It is now on the public map."
                    )
                except (BackendError, ValueError) as e:
                    st.error(str(e))
            cancel_col.button(Label.CANCEL.value, on_click=self._close, key="publish_cancel")
