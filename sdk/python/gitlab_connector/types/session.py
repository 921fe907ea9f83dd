"""Session-related data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Session:
    """The authenticated GitLab user, as returned by the session endpoints."""

    user_id: int
    username: str
    name: str | None
    email: str | None
    private_token: str | None  # absent when the session was opened with a token
