"""Authorization request and result values."""

from dataclasses import dataclass

from accessgate.domain.value_objects import (
    DecisionReason,
    PermissionAction,
    ResourceQualifier,
    SystemModule,
)


def _known(enum_cls, value):
    try:
        return enum_cls(value)
    except ValueError:
        return value


@dataclass(frozen=True)
class PermissionRequest:
    """Requested action on a module, optionally on one resource.

    Known module and action names are normalized to their enums. Unknown names
    are kept as plain strings so they can still be evaluated (and denied, or
    granted by the superuser bypass); see ``is_known``.
    """

    module: SystemModule | str
    action: PermissionAction | str
    resource: ResourceQualifier | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "module", _known(SystemModule, self.module))
        object.__setattr__(self, "action", _known(PermissionAction, self.action))

    @property
    def is_known(self) -> bool:
        return isinstance(self.module, SystemModule) and isinstance(
            self.action, PermissionAction
        )

    def describe(self) -> str:
        target = f"{self.module}:{self.action}"
        return f"{target}@{self.resource}" if self.resource else target


@dataclass(frozen=True)
class PermissionResult:
    """Decision with the reason that produced it."""

    granted: bool
    reason: DecisionReason

    @classmethod
    def grant(cls, reason: DecisionReason) -> "PermissionResult":
        return cls(granted=True, reason=reason)

    @classmethod
    def deny(cls, reason: DecisionReason) -> "PermissionResult":
        return cls(granted=False, reason=reason)

    def to_dict(self) -> dict[str, object]:
        return {"granted": self.granted, "reason": self.reason.value}
