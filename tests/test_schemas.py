# tests/test_schemas.py
import pytest
from pydantic import ValidationError

from quotes_decode.schemas.interpretation import Interpretation
from quotes_decode.schemas.session import AuthUser, SessionIdentity, derive_display_name


@pytest.mark.parametrize(
    ("metadata", "email", "expected"),
    [
        ({"full_name": "Bea Quill", "name": "Bea"}, "bea@example.com", "Bea Quill"),
        ({"name": "Bea"}, "bea@example.com", "Bea"),
        ({"full_name": ""}, "bea@example.com", "bea"),
        ({}, None, None),
        (None, "@example.com", None),
    ],
)
def test_derive_display_name(metadata, email, expected) -> None:
    assert derive_display_name(metadata, email) == expected


def test_identity_from_user_picks_avatar() -> None:
    user = AuthUser(id="u", email="a@b.c", user_metadata={"picture": "http://img/a.png"})

    identity = SessionIdentity.from_user(user)

    assert identity.display_name == "a"
    assert identity.avatar_url == "http://img/a.png"


def test_interpretation_from_row_defaults() -> None:
    item = Interpretation.from_row({"id": 7, "content": "x", "author_name": None, "upvotes": None})

    assert item.id == "7"
    assert item.author_name == "Anonymous"
    assert item.upvotes == 0


def test_interpretation_rejects_negative_upvotes() -> None:
    with pytest.raises(ValidationError):
        Interpretation(id="1", content="x", upvotes=-1)
