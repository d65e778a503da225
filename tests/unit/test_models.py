"""
Unit tests for response decoding.

Tests cover:
- JSON dict decoding and shape errors
- Protobuf message decoding
"""

import pytest

from blog_sdk._generated import Post as PostMessage
from blog_sdk._generated import User as UserMessage
from blog_sdk.errors import SerializationError
from blog_sdk.models import AuthResponse, Post, PostList, User

POST_JSON = {
    "id": 7,
    "title": "Hello",
    "content": "World",
    "author_id": 3,
    "created_at": "2024-01-01T00:00:00Z",
    "updated_at": "2024-01-02T00:00:00Z",
}

USER_JSON = {
    "id": 3,
    "username": "alice",
    "email": "alice@example.com",
    "created_at": "2024-01-01T00:00:00Z",
}


class TestFromDict:
    """Tests for JSON decoding."""

    def test_post(self):
        post = Post.from_dict(POST_JSON)
        assert post.id == 7
        assert post.author_id == 3
        assert post.updated_at == "2024-01-02T00:00:00Z"

    def test_extra_fields_ignored(self):
        post = Post.from_dict({**POST_JSON, "likes_count": 4})
        assert post.title == "Hello"

    def test_auth_response(self):
        response = AuthResponse.from_dict({"token": "t", "user": USER_JSON})
        assert response.token == "t"
        assert response.user == User.from_dict(USER_JSON)

    def test_post_list(self):
        page = PostList.from_dict({"posts": [POST_JSON], "total": 1, "limit": 10, "offset": 0})
        assert page.posts == [Post.from_dict(POST_JSON)]
        assert page.total == 1

    def test_missing_field(self):
        data = dict(POST_JSON)
        del data["content"]
        with pytest.raises(SerializationError, match="missing field 'content'"):
            Post.from_dict(data)

    def test_wrong_type(self):
        with pytest.raises(SerializationError, match="'id' should be int"):
            Post.from_dict({**POST_JSON, "id": "7"})

    def test_bool_is_not_int(self):
        with pytest.raises(SerializationError):
            User.from_dict({**USER_JSON, "id": True})

    def test_not_an_object(self):
        with pytest.raises(SerializationError, match="expected object"):
            PostList.from_dict(["not", "a", "dict"])

    def test_nested_user_must_be_object(self):
        with pytest.raises(SerializationError):
            AuthResponse.from_dict({"token": "t", "user": "alice"})


class TestFromProto:
    """Tests for protobuf decoding."""

    def test_user(self):
        message = UserMessage(id=3, username="alice", email="a@x", created_at="c", bio="hi")
        assert User.from_proto(message) == User(id=3, username="alice", email="a@x", created_at="c")

    def test_post(self):
        message = PostMessage(
            id=7,
            title="Hello",
            content="World",
            author_id=3,
            created_at="c",
            updated_at="u",
            tags=["a", "b"],
            published=True,
        )
        post = Post.from_proto(message)
        assert post == Post(7, "Hello", "World", 3, "c", "u")
