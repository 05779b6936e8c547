"""Domain exceptions."""


class AccessGateError(Exception):
    """Base exception for AccessGate."""

    pass


class PermissionDenied(AccessGateError):
    """Actor is not allowed to perform the requested administrative action."""

    pass


class NotFound(AccessGateError):
    """Requested record was not found."""

    pass


class ValidationError(AccessGateError):
    """Validation failed for input data."""

    pass


class ActorNotFound(AccessGateError):
    """Actor profile does not exist in the store."""

    def __init__(self, actor_id: str) -> None:
        super().__init__(f"Actor not found: {actor_id}")
        self.actor_id = actor_id


class StoreUnavailable(AccessGateError):
    """Policy store call failed or timed out."""

    pass


class DanglingReference(AccessGateError):
    """A referenced permission or role id no longer resolves."""

    def __init__(self, kind: str, ref_id: str, owner: str | None = None) -> None:
        detail = f"{kind} {ref_id} does not resolve"
        if owner:
            detail = f"{detail} (referenced by {owner})"
        super().__init__(detail)
        self.kind = kind
        self.ref_id = ref_id
        self.owner = owner
