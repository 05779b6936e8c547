"""Resource qualifier - narrows a permission to a type or a single instance."""

from dataclasses import dataclass

from accessgate.domain.exceptions import ValidationError


@dataclass(frozen=True)
class ResourceQualifier:
    """Resource type with optional instance id, encoded as ``type`` or ``type:id``."""

    type: str
    id: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.type, str) or not self.type.strip():
            raise ValidationError("Resource type must be a non-empty string")
        if self.id is not None and not isinstance(self.id, str):
            raise ValidationError("Resource id must be a string")

    @classmethod
    def parse(cls, value: str) -> "ResourceQualifier":
        """Parse ``type`` or ``type:id``. An empty id after the colon means any instance."""
        resource_type, _, resource_id = value.partition(":")
        return cls(type=resource_type.strip(), id=resource_id.strip() or None)

    def encode(self) -> str:
        return f"{self.type}:{self.id}" if self.id else self.type

    def __str__(self) -> str:
        return self.encode()
