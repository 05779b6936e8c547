"""Permission checker implementation - loads a policy snapshot and evaluates it."""

import asyncio
import logging
from collections.abc import Sequence

from accessgate.application.ports import UnitOfWork, UnitOfWorkFactory
from accessgate.domain.entities import Actor, Role, UserPermission
from accessgate.domain.exceptions import ActorNotFound, DanglingReference, StoreUnavailable
from accessgate.domain.policy import (
    PermissionRequest,
    PermissionResult,
    PolicyEvaluator,
    PolicySnapshot,
)
from accessgate.domain.value_objects import DecisionReason, ResourceQualifier

logger = logging.getLogger(__name__)


class AccessGatePermissionChecker:
    """Authorizes actors against the permission catalog, roles and overrides.

    Every call opens one read-only Unit of Work, so all records an evaluation
    looks at come from the same snapshot. Failures deny with a reason instead
    of raising; ``asyncio.CancelledError`` is never caught.
    """

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        evaluator: PolicyEvaluator | None = None,
        timeout_seconds: float | None = 5.0,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._evaluator = evaluator or PolicyEvaluator()
        self._timeout = timeout_seconds

    async def authorize(self, actor_id: str, request: PermissionRequest) -> PermissionResult:
        """Decide one request for actor_id."""
        results = await self.authorize_many(actor_id, [request])
        return results[0]

    async def authorize_many(
        self, actor_id: str, requests: Sequence[PermissionRequest]
    ) -> list[PermissionResult]:
        """Decide each request independently against one snapshot."""
        if not requests:
            return []
        try:
            async with asyncio.timeout(self._timeout):
                snapshot = await self._load_snapshot(actor_id)
            return [self._evaluator.evaluate(snapshot, r) for r in requests]
        except ActorNotFound:
            logger.info("Denying %d request(s): actor %s not found", len(requests), actor_id)
            return [PermissionResult.deny(DecisionReason.ACTOR_NOT_FOUND)] * len(requests)
        except StoreUnavailable as e:
            logger.warning("Denying request(s) for %s: store unavailable: %s", actor_id, e)
        except TimeoutError:
            logger.warning(
                "Denying request(s) for %s: store did not answer within %ss",
                actor_id,
                self._timeout,
            )
        except Exception:
            logger.exception("Denying request(s) for %s: authorization failed", actor_id)
        return [PermissionResult.deny(DecisionReason.STORE_ERROR)] * len(requests)

    async def check(
        self,
        actor_id: str,
        module: str,
        action: str,
        resource: ResourceQualifier | None = None,
    ) -> bool:
        """Boolean shortcut over ``authorize``."""
        result = await self.authorize(
            actor_id, PermissionRequest(module=module, action=action, resource=resource)
        )
        return result.granted

    async def _load_snapshot(self, actor_id: str) -> PolicySnapshot:
        async with self._uow_factory(read_only=True) as uow:
            actor, override = await asyncio.gather(
                uow.actors.get_by_id(actor_id),
                uow.user_permissions.get(actor_id),
            )
            if actor is None:
                raise ActorNotFound(actor_id)
            if self._evaluator.is_superuser(actor.role_name):
                return PolicySnapshot(actor=actor)

            role = await self._load_role(uow, actor, override)
            permission_ids: set[str] = set()
            if override is not None:
                permission_ids |= override.referenced_permission_ids()
            if role is not None:
                permission_ids |= role.permissions
            permissions = (
                await uow.permissions.list_by_ids(permission_ids) if permission_ids else []
            )

        return PolicySnapshot(
            actor=actor,
            user_permission=override,
            role=role,
            permissions={p.id: p for p in permissions},
        )

    async def _load_role(
        self, uow: UnitOfWork, actor: Actor, override: UserPermission | None
    ) -> Role | None:
        """Role from the override record, falling back to the actor's role name."""
        if override is not None and override.role_id:
            role = await uow.roles.get_by_id(override.role_id)
            if role is not None:
                return role
            logger.warning(
                "Ignoring dangling reference: %s",
                DanglingReference("Role", override.role_id, f"overrides of {actor.id}"),
            )
        return await uow.roles.get_by_name(actor.role_name)
