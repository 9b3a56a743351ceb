import logging
from typing import Any, Dict
from langgraph.graph import StateGraph, START, END
from clients.supabase_client import SupabaseClient
from models.models import Message, PublicPostInput, PublishState
from workflows.workflow import Workflow

logger = logging.getLogger(__name__)


class PublishWorkflow(Workflow):
    """Republish a private message to the public map at a rounded location."""

    def __init__(self, supabase_client: SupabaseClient, location_decimals: int = 2):
        self.supabase_client = supabase_client
        self.location_decimals = location_decimals
        self.graph = self._build_graph()

    def _build_graph(self):
        graph = StateGraph(PublishState)
        graph.add_node("round_location", self._round_location)
        graph.add_node("insert_post", self._insert_post)
        graph.add_edge(START, "round_location")
        graph.add_edge("round_location", "insert_post")
        graph.add_edge("insert_post", END)
        return graph.compile()

    def _coerce_state(self, payload: Dict[str, Any]) -> PublishState:
        if not isinstance(payload, dict):
            raise ValueError("Input must be a dict")
        message = payload.get("message")
        if not isinstance(message, Message):
            raise ValueError("message is required")
        if not payload.get("user_id"):
            raise ValueError("user_id is required")
        if payload.get("lat") is None or payload.get("lng") is None:
            raise ValueError("A location is required to publish.")
        return PublishState(
            message=message,
            user_id=payload["user_id"],
            lat=payload["lat"],
            lng=payload["lng"],
            city=payload.get("city"),
            decimals=payload.get("decimals", self.location_decimals),
        )

    def _round_location(self, state: PublishState) -> Dict[str, Any]:
        payload = PublicPostInput(
            user_id=state.user_id,
            content=state.message.content,
            city=state.city,
            lat=state.lat,
            lng=state.lng,
            decimals=state.decimals,
        )
        return {"payload": payload}

    def _insert_post(self, state: PublishState) -> Dict[str, Any]:
        post = self.supabase_client.create_public_post(state.payload)
        logger.info("Published message %s as post %s", state.message.id, post.id)
        return {"post": post}

    def run(self, input: Dict[str, Any]) -> Dict[str, Any]:
        result = self.graph.invoke(input=self._coerce_state(input))
        return {"post": result["post"]}
