"""Actor entity - the already-authenticated principal being authorized."""

from dataclasses import dataclass


@dataclass
class Actor:
    """Actor profile with its declared top-level role name."""

    id: str
    role_name: str
    email: str | None = None
    display_name: str | None = None
