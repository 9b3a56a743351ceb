import math
from datetime import datetime, timezone
from unittest.mock import MagicMock
import pytest

from clients.supabase_client import BackendError
from models.models import Message, PublicPost
from test_data import PUBLIC_POST_ROWS, USER_ID
from workflows.publish_workflow import PublishWorkflow


@pytest.fixture
def message():
    return Message(
        id="msg-1",
        content="I miss the sea.",
        category_id="cat-1",
        created_at=datetime(2025, 3, 1, 12, 5, tzinfo=timezone.utc),
        user_id=USER_ID,
    )


@pytest.fixture
def supabase_client():
    client = MagicMock()
    client.create_public_post.return_value = PublicPost.model_validate(
        PUBLIC_POST_ROWS[0]
    )
    return client


def test_publish_rounds_location_and_inserts(message, supabase_client):
    workflow = PublishWorkflow(supabase_client)

    output = workflow.run(
        {
            "message": message,
            "user_id": USER_ID,
            "lat": 52.229676,
            "lng": 21.012229,
            "city": "  Warsaw ",
        }
    )

    payload = supabase_client.create_public_post.call_args.args[0]
    assert (payload.lat, payload.lng) == (52.23, 21.01)
    assert payload.city == "Warsaw"
    assert payload.content == "I miss the sea."
    assert payload.user_id == USER_ID
    assert output["post"].id == "post-1"


def test_publish_uses_configured_precision(message, supabase_client):
    workflow = PublishWorkflow(supabase_client, location_decimals=1)

    workflow.run({"message": message, "user_id": USER_ID, "lat": 52.26, "lng": 21.04})

    payload = supabase_client.create_public_post.call_args.args[0]
    assert (payload.lat, payload.lng) == (52.3, 21.0)
    assert payload.city is None


@pytest.mark.parametrize(
    "overrides",
    [
        {"message": None},
        {"user_id": ""},
        {"lat": None},
        {"lng": None},
    ],
)
def test_publish_rejects_incomplete_input(message, supabase_client, overrides):
    workflow = PublishWorkflow(supabase_client)
    payload = {"message": message, "user_id": USER_ID, "lat": 1.0, "lng": 2.0}
    payload.update(overrides)

    with pytest.raises(ValueError):
        workflow.run(payload)
    supabase_client.create_public_post.assert_not_called()


def test_publish_rejects_non_finite_location(message, supabase_client):
    workflow = PublishWorkflow(supabase_client)

    with pytest.raises(ValueError):
        workflow.run(
            {"message": message, "user_id": USER_ID, "lat": math.nan, "lng": 2.0}
        )
    supabase_client.create_public_post.assert_not_called()


def test_publish_propagates_backend_failure(message, supabase_client):
    supabase_client.create_public_post.side_effect = BackendError("permission denied")
    workflow = PublishWorkflow(supabase_client)

    with pytest.raises(BackendError, match="permission denied"):
        workflow.run({"message": message, "user_id": USER_ID, "lat": 1.0, "lng": 2.0})
