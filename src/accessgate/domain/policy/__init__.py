"""Authorization policy: request/result values, matching and evaluation."""

from accessgate.domain.policy.evaluator import (
    DEFAULT_SUPERUSER_ROLE,
    EvaluationStage,
    PolicyEvaluator,
)
from accessgate.domain.policy.matching import any_match, permission_matches
from accessgate.domain.policy.request import PermissionRequest, PermissionResult
from accessgate.domain.policy.snapshot import PolicySnapshot

__all__ = [
    "DEFAULT_SUPERUSER_ROLE",
    "EvaluationStage",
    "PermissionRequest",
    "PermissionResult",
    "PolicyEvaluator",
    "PolicySnapshot",
    "any_match",
    "permission_matches",
]
