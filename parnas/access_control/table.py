"""Access control decision table.

Rows (role, resource, action, owner -> result):
  ADMIN  *                 *               *      ALLOW
  USER   PUBLIC            READ            *      ALLOW
  USER   SHARED            READ            *      ALLOW
  USER   *                 *               True   ALLOW
  GUEST  PUBLIC            READ            *      ALLOW
  (all other combinations)                        DENY

build_access_table spells the DENY rows out so the 3x3x3x2 cross product is
checked for completeness and disjointness when the table is built.
build_access_table_first_match keeps the short form above and relies on
declaration order plus the default row.
"""

from __future__ import annotations

from parnas.core.domain.dimensions import Dimension
from parnas.core.domain.models import Rule, rule
from parnas.core.table.matchers import ANY, one_of
from parnas.core.table.rule_table import Ordering, RuleTable
from .enums import AccessResult, Action, ResourceType, UserRole

ACCESS_DIMENSIONS = (
    Dimension.discrete("role", UserRole),
    Dimension.discrete("resource", ResourceType),
    Dimension.discrete("action", Action),
    Dimension.discrete("is_owner", (False, True)),
)

ALLOW = AccessResult.ALLOW
DENY = AccessResult.DENY


def _allow_rules() -> list[Rule]:
    return [
        rule(UserRole.ADMIN, ANY, ANY, ANY, then=ALLOW, label="admin: anything"),
        rule(UserRole.USER, ResourceType.PUBLIC, Action.READ, ANY, then=ALLOW, label="user: read public"),
        rule(UserRole.USER, ResourceType.SHARED, Action.READ, ANY, then=ALLOW, label="user: read shared"),
        rule(UserRole.USER, ANY, ANY, True, then=ALLOW, label="user: full control of own"),
        rule(UserRole.GUEST, ResourceType.PUBLIC, Action.READ, ANY, then=ALLOW, label="guest: read public"),
    ]


def build_access_table() -> RuleTable[AccessResult]:
    deny_rules = [
        rule(
            UserRole.USER,
            one_of(ResourceType.PUBLIC, ResourceType.SHARED),
            one_of(Action.WRITE, Action.DELETE),
            False,
            then=DENY,
            label="user: modify public/shared not owned",
        ),
        rule(UserRole.USER, ResourceType.PRIVATE, ANY, False, then=DENY, label="user: private not owned"),
        rule(
            UserRole.GUEST,
            ResourceType.PUBLIC,
            one_of(Action.WRITE, Action.DELETE),
            ANY,
            then=DENY,
            label="guest: modify public",
        ),
        rule(
            UserRole.GUEST,
            one_of(ResourceType.SHARED, ResourceType.PRIVATE),
            ANY,
            ANY,
            then=DENY,
            label="guest: shared/private",
        ),
    ]
    return RuleTable(
        "access_control",
        ACCESS_DIMENSIONS,
        _allow_rules() + deny_rules,
        ordering=Ordering.DISJOINT,
    )


def build_access_table_first_match() -> RuleTable[AccessResult]:
    return RuleTable(
        "access_control_first_match",
        ACCESS_DIMENSIONS,
        _allow_rules(),
        ordering=Ordering.FIRST_MATCH,
        default=DENY,
    )


_DEFAULT_TABLE = build_access_table()


def check_access(role: UserRole, resource: ResourceType, action: Action, is_owner: bool) -> AccessResult:
    return _DEFAULT_TABLE.evaluate(role, resource, action, is_owner)
