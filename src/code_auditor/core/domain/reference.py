from __future__ import annotations

from .exceptions import InvalidReferenceError
from .models import RepositoryReference


DEFAULT_HOST = "github.com"


def parse_repository_url(url: str, host: str = DEFAULT_HOST) -> RepositoryReference:
    """Parse a repository URL into an owner/name reference.

    Accepts:
    - "https://github.com/owner/name"
    - "https://github.com/owner/name/"
    - "github.com/owner/name.git"

    The host marker must be followed by exactly two non-empty segments.

    Raises:
        InvalidReferenceError: If the URL does not match that form
    """
    cleaned = (url or "").strip()
    if cleaned.endswith("/"):
        cleaned = cleaned[:-1]

    parts = cleaned.split("/")
    if host not in parts:
        raise InvalidReferenceError(url)

    tail = parts[parts.index(host) + 1:]
    if len(tail) != 2 or not all(tail):
        raise InvalidReferenceError(url)

    owner, name = tail
    if name.endswith(".git"):
        name = name[:-4]
    if not name:
        raise InvalidReferenceError(url)

    return RepositoryReference(owner=owner, name=name)
