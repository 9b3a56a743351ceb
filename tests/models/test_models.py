import math
import pytest
from pydantic import ValidationError

from models.models import (
    Category,
    CategoryInput,
    MessageInput,
    NotificationRow,
    PublicPost,
    PublicPostInput,
)
from test_data import CATEGORY_ROWS, NOTIFICATION_ROWS, PUBLIC_POST_ROWS, USER_ID


def test_rows_parse_from_backend_payloads():
    category = Category.model_validate(CATEGORY_ROWS[0])
    assert category.title == "longing"
    assert category.created_at.tzinfo is not None

    post = PublicPost.model_validate(PUBLIC_POST_ROWS[1])
    assert post.city is None
    assert post.lng == -74.01

    notification = NotificationRow.model_validate(NOTIFICATION_ROWS[0])
    assert notification.read_at is None
    assert notification.similarity == pytest.approx(0.87)


def test_category_input_strips_title():
    assert CategoryInput(title="  longing ", user_id=USER_ID).title == "longing"


@pytest.mark.parametrize("title", ["", "   ", "\n\t"])
def test_category_input_rejects_blank_title(title):
    with pytest.raises(ValidationError):
        CategoryInput(title=title, user_id=USER_ID)


def test_message_input_rejects_blank_content():
    with pytest.raises(ValidationError):
        MessageInput(content="  ", category_id="cat-1", user_id=USER_ID)
    assert (
        MessageInput(content=" hi ", category_id="cat-1", user_id=USER_ID).content
        == "hi"
    )


def test_public_post_input_rounds_before_storage():
    payload = PublicPostInput(
        user_id=USER_ID, content="I miss the sea.", lat=52.229676, lng=21.012229
    )

    assert (payload.lat, payload.lng) == (52.23, 21.01)
    assert payload.model_dump() == {
        "user_id": USER_ID,
        "content": "I miss the sea.",
        "city": None,
        "lat": 52.23,
        "lng": 21.01,
    }


def test_public_post_input_blank_city_becomes_none():
    payload = PublicPostInput(
        user_id=USER_ID, content="x", city="   ", lat=1.0, lng=2.0
    )
    assert payload.city is None
    assert (
        PublicPostInput(user_id=USER_ID, content="x", city=" Gdańsk ", lat=1, lng=2).city
        == "Gdańsk"
    )


@pytest.mark.parametrize(
    "lat, lng", [(math.nan, 5.0), (5.0, math.inf), (95.0, 0.0), (0.0, 200.0)]
)
def test_public_post_input_rejects_unusable_coordinates(lat, lng):
    with pytest.raises(ValidationError):
        PublicPostInput(user_id=USER_ID, content="x", lat=lat, lng=lng)
