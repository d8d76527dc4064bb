"""Role-based authorization rules.

Each role contributes its own grants; a role's permissions are its grants
plus those of every role below it in the hierarchy. Record-scoped grants
carry a predicate that must hold for the user and the record at hand.

    permissions_for(UserRole.EDITOR)
    is_permitted(user, "articles", "update", record=article)
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from baraza.domain.entities.user import User, UserRole

Predicate = Callable[[User, Any], bool]


@dataclass(frozen=True)
class Grant:
    """Permission to perform ``actions`` on ``resource``, optionally scoped by a predicate."""

    resource: str
    actions: frozenset[str]
    predicate: Predicate | None = None

    def allows(self, resource: str, action: str) -> bool:
        return resource == self.resource and action in self.actions


def _grant(resource: str, *actions: str, when: Predicate | None = None) -> Grant:
    return Grant(resource=resource, actions=frozenset(actions), predicate=when)


def _is_owner(user: User, record: Any) -> bool:
    return getattr(record, "user_id", None) == user.id


def _is_self(user: User, record: Any) -> bool:
    return getattr(record, "id", None) == user.id


def _is_own_address(user: User, record: Any) -> bool:
    email = getattr(record, "email", None)
    return bool(email and user.email) and email.lower() == user.email.lower()


_ROLE_GRANTS: dict[UserRole, tuple[Grant, ...]] = {
    UserRole.GUEST: (
        _grant("home", "index"),
        _grant("articles", "index", "show", "search"),
        _grant("subscribers", "create"),
    ),
    UserRole.REGISTERED_USER: (
        _grant("users", "change_email_form", "change_email", when=_is_self),
        _grant("subscribers", "destroy", when=_is_own_address),
        _grant("articles", "new", "create"),
        _grant("articles", "edit", "update", when=_is_owner),
        _grant("tags", "index"),
    ),
    UserRole.EDITOR: (
        _grant("categories", "index", "create"),
        _grant("newsletters", "index", "show", "create", "update", "reject", "send"),
    ),
    UserRole.ADMINISTRATOR: (
        _grant("users", "new", "create", "edit", "update", "show", "destroy", "index"),
        _grant("articles", "destroy", "reindex"),
        _grant("subscribers", "index", "destroy"),
    ),
}


def grants_for(role: UserRole) -> list[Grant]:
    """All grants held by ``role``, inherited ones first."""
    grants: list[Grant] = []
    for candidate in UserRole:
        if role.includes(candidate):
            grants.extend(_ROLE_GRANTS.get(candidate, ()))
    return grants


def permissions_for(role: UserRole) -> set[tuple[str, str]]:
    """Every (resource, action) pair the role may perform on at least some record."""
    return {
        (grant.resource, action)
        for grant in grants_for(role)
        for action in grant.actions
    }


def role_of(user: User | None) -> UserRole:
    return user.role if user is not None else UserRole.GUEST


def is_permitted(
    user: User | None, resource: str, action: str, record: Any | None = None
) -> bool:
    """Check a single action, evaluating record predicates when present.

    A predicate-scoped grant only matches when a record is supplied.
    """
    for grant in grants_for(role_of(user)):
        if not grant.allows(resource, action):
            continue
        if grant.predicate is None:
            return True
        if user is not None and record is not None and grant.predicate(user, record):
            return True
    return False
