import hashlib
from typing import Optional

from app.config import settings


def default_avatar_src(email: str) -> str:
    """Gravatar URL for ``email``, falling back to the mystery-person image."""
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    return f"{settings.gravatar_url}/{digest}?s=160&d=mp&r=PG"


def get_avatar_url_from_user(avatar: Optional[str], username: Optional[str], email: str) -> str:
    """Return a URL for the user's avatar instead of the stored image payload.

    Stored avatars can be large base64 blobs; the web app serves them at
    ``/<username>/avatar.png`` so responses only need the link.
    """
    if not avatar or not username:
        return default_avatar_src(email)
    return f"{settings.webapp_url}/{username}/avatar.png"
