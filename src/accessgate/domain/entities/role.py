"""Role entity for RBAC."""

from dataclasses import dataclass, field
from datetime import datetime

from accessgate.domain.exceptions import ValidationError
from accessgate.domain.validation import parse_ids, require_text


@dataclass
class Role:
    """Role - named bundle of permission ids.

    ``level`` ranks authority for display and ordering only.
    """

    id: str
    name: str
    description: str = ""
    permissions: frozenset[str] = field(default_factory=frozenset)
    level: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        require_text(self.id, "Role id")
        require_text(self.name, "Role name")
        self.permissions = parse_ids(self.permissions, "Role permissions")
        if not isinstance(self.description, str):
            raise ValidationError("Role description must be a string")
        if isinstance(self.level, bool) or not isinstance(self.level, int):
            raise ValidationError("Role level must be an integer")
