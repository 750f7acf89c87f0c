"""
Role edits made during a review session.

Every function takes the current role list and returns a new one; the input
list and its roles are never modified, so an edit either applies completely
or not at all. Invalid targets are a no-op that hands back the same list.
"""

import logging
from dataclasses import replace

from models.audit import RoleRecommendation, TierRates
from services.roles import build_role

logger = logging.getLogger(__name__)


def recalculate_role(role: RoleRecommendation, tier_rates: TierRates) -> RoleRecommendation:
    """
    Recompute hours, cost and job description from the role's task list.

    Always from scratch, never incrementally, so repeated edits cannot drift.
    """
    return build_role(
        role.tier,
        role.vertical,
        role.tasks,
        tier_rates,
        role_id_=role.id,
        title=role.role_title,
    )


def _find_index(roles: list[RoleRecommendation], role_id: str) -> int | None:
    for index, role in enumerate(roles):
        if role.id == role_id:
            return index
    return None


def move_task(
    roles: list[RoleRecommendation],
    source_id: str,
    target_id: str,
    task_index: int,
    tier_rates: TierRates | None = None,
) -> list[RoleRecommendation]:
    """
    Move one task from the source role to the end of the target role.

    Both roles are recalculated. A source left without tasks stays in the
    list so the user can still see and undo the move.
    """
    source_index = _find_index(roles, source_id)
    target_index = _find_index(roles, target_id)
    if source_index is None or target_index is None or source_index == target_index:
        logger.debug("Ignoring task move %s -> %s", source_id, target_id)
        return roles

    source = roles[source_index]
    if not 0 <= task_index < len(source.tasks):
        logger.debug("Ignoring task move, index %d out of range for %s", task_index, source_id)
        return roles

    tier_rates = tier_rates or TierRates.defaults()
    task = source.tasks[task_index]
    target = roles[target_index]

    new_source = recalculate_role(
        replace(source, tasks=source.tasks[:task_index] + source.tasks[task_index + 1:]),
        tier_rates,
    )
    new_target = recalculate_role(
        replace(target, tasks=target.tasks + (task,)),
        tier_rates,
    )

    updated = list(roles)
    updated[source_index] = new_source
    updated[target_index] = new_target
    return updated


def reorder_roles(roles: list[RoleRecommendation], from_index: int, to_index: int) -> list[RoleRecommendation]:
    """Swap two roles' positions. No recalculation."""
    if not (0 <= from_index < len(roles) and 0 <= to_index < len(roles)):
        return roles
    if from_index == to_index:
        return roles
    updated = list(roles)
    updated[from_index], updated[to_index] = updated[to_index], updated[from_index]
    return updated
