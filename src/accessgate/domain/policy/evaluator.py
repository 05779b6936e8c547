"""Decision engine - ordered precedence evaluation over a policy snapshot.

Evaluation is a small state machine. Each stage either returns a terminal
``PermissionResult`` or names the next stage:

    SUPERUSER -> OVERRIDE -> RESTRICTION -> GRANTS -> ROLE
                     \\____________________________/^
                      (no override record: straight to ROLE)

Restriction runs before any grant, so an explicit denial beats custom and
resource-scoped grants as well as the role.
"""

import logging
from collections.abc import Callable
from enum import StrEnum

from accessgate.domain.exceptions import DanglingReference
from accessgate.domain.policy.matching import any_match
from accessgate.domain.policy.request import PermissionRequest, PermissionResult
from accessgate.domain.policy.snapshot import PolicySnapshot
from accessgate.domain.value_objects import DecisionReason

logger = logging.getLogger(__name__)

DEFAULT_SUPERUSER_ROLE = "super_admin"


class EvaluationStage(StrEnum):
    """Precedence stages, in evaluation order."""

    SUPERUSER = "superuser"
    OVERRIDE = "override"
    RESTRICTION = "restriction"
    GRANTS = "grants"
    ROLE = "role"


StageOutcome = PermissionResult | EvaluationStage
StageHandler = Callable[[PolicySnapshot, PermissionRequest], StageOutcome]


class PolicyEvaluator:
    """Pure evaluation of one request against one snapshot."""

    def __init__(self, superuser_role: str = DEFAULT_SUPERUSER_ROLE) -> None:
        self._superuser_role = superuser_role
        self._handlers: dict[EvaluationStage, StageHandler] = {
            EvaluationStage.SUPERUSER: self._superuser_bypass,
            EvaluationStage.OVERRIDE: self._override_presence,
            EvaluationStage.RESTRICTION: self._explicit_restriction,
            EvaluationStage.GRANTS: self._custom_and_resource_grants,
            EvaluationStage.ROLE: self._role_fallback,
        }

    @property
    def superuser_role(self) -> str:
        return self._superuser_role

    def is_superuser(self, role_name: str | None) -> bool:
        return role_name == self._superuser_role

    def evaluate(self, snapshot: PolicySnapshot, request: PermissionRequest) -> PermissionResult:
        """Run the stages from SUPERUSER until one is terminal."""
        if not request.is_known:
            logger.warning(
                "Request for actor %s names an unknown module or action: %s",
                snapshot.actor.id,
                request.describe(),
            )
        stage = EvaluationStage.SUPERUSER
        trace = []
        while True:
            trace.append(stage)
            outcome = self._handlers[stage](snapshot, request)
            if isinstance(outcome, PermissionResult):
                logger.debug(
                    "actor=%s request=%s granted=%s reason=%s stages=%s",
                    snapshot.actor.id,
                    request.describe(),
                    outcome.granted,
                    outcome.reason,
                    ",".join(trace),
                )
                return outcome
            stage = outcome

    def _superuser_bypass(
        self, snapshot: PolicySnapshot, request: PermissionRequest
    ) -> StageOutcome:
        if self.is_superuser(snapshot.actor.role_name):
            return PermissionResult.grant(DecisionReason.SUPERUSER_BYPASS)
        return EvaluationStage.OVERRIDE

    def _override_presence(
        self, snapshot: PolicySnapshot, request: PermissionRequest
    ) -> StageOutcome:
        if snapshot.user_permission is None:
            return EvaluationStage.ROLE
        return EvaluationStage.RESTRICTION

    def _explicit_restriction(
        self, snapshot: PolicySnapshot, request: PermissionRequest
    ) -> StageOutcome:
        override = snapshot.user_permission
        restricted = snapshot.resolve(
            override.restricted_permissions, owner=f"restrictions of {override.user_id}"
        )
        if any_match(restricted, request):
            return PermissionResult.deny(DecisionReason.EXPLICIT_RESTRICTION)
        return EvaluationStage.GRANTS

    def _custom_and_resource_grants(
        self, snapshot: PolicySnapshot, request: PermissionRequest
    ) -> StageOutcome:
        override = snapshot.user_permission
        custom = snapshot.resolve(
            override.custom_permissions, owner=f"custom grants of {override.user_id}"
        )
        if any_match(custom, request):
            return PermissionResult.grant(DecisionReason.CUSTOM_GRANT)

        if request.resource is not None:
            for entry in override.resource_permissions:
                if not entry.covers(request.resource.type, request.resource.id):
                    continue
                if request.action not in entry.actions:
                    continue
                try:
                    permission = snapshot.permission(
                        entry.permission_id, owner=f"resource grants of {override.user_id}"
                    )
                except DanglingReference as e:
                    logger.warning("Ignoring dangling reference: %s", e)
                    continue
                if request.action in permission.actions:
                    return PermissionResult.grant(DecisionReason.RESOURCE_GRANT)
        return EvaluationStage.ROLE

    def _role_fallback(
        self, snapshot: PolicySnapshot, request: PermissionRequest
    ) -> StageOutcome:
        role = snapshot.role
        if role is None:
            logger.info(
                "No role resolved for actor %s (role name %r)",
                snapshot.actor.id,
                snapshot.actor.role_name,
            )
            return PermissionResult.deny(DecisionReason.ROLE_DENIED)
        granted = snapshot.resolve(role.permissions, owner=f"role {role.name}")
        if any_match(granted, request):
            return PermissionResult.grant(DecisionReason.ROLE_GRANT)
        return PermissionResult.deny(DecisionReason.ROLE_DENIED)
