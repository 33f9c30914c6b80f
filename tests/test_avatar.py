import hashlib

import pytest

from app.config import settings
from app.core.avatar import default_avatar_src, get_avatar_url_from_user


def _gravatar(email: str) -> str:
    digest = hashlib.md5(email.encode("utf-8")).hexdigest()
    return f"{settings.gravatar_url}/{digest}?s=160&d=mp&r=PG"


@pytest.mark.unit
@pytest.mark.parametrize("avatar", [None, ""])
def test_missing_avatar_falls_back_to_default(avatar):
    assert get_avatar_url_from_user(avatar, "alice", "a@x.com") == _gravatar("a@x.com")


@pytest.mark.unit
@pytest.mark.parametrize("username", [None, ""])
def test_missing_username_falls_back_to_default(username):
    assert get_avatar_url_from_user("img.png", username, "a@x.com") == _gravatar("a@x.com")


@pytest.mark.unit
def test_stored_avatar_links_to_webapp():
    assert get_avatar_url_from_user("img.png", "alice", "a@x.com") == f"{settings.webapp_url}/alice/avatar.png"


@pytest.mark.unit
def test_default_avatar_normalizes_email():
    assert default_avatar_src("  A@X.com ") == default_avatar_src("a@x.com")
