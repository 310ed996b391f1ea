from __future__ import annotations

from dataclasses import dataclass
from functools import wraps
from typing import Callable, Iterable, Optional

from ..core.constants import UNAUTHORIZED_MESSAGE
from ..core.enums import Role
from ..core.exceptions import AuthorizationError


@dataclass(frozen=True)
class Caller:
    """Who is calling a procedure, as established by the (external) login flow."""

    user_id: Optional[str]
    role: Optional[Role]


AuthorizationPredicate = Callable[[Optional[Caller]], bool]


def roles_predicate(roles: Iterable[Role]) -> AuthorizationPredicate:
    """Build the default predicate: a signed-in caller whose role is in `roles`."""

    allowed = frozenset(Role(r) for r in roles)

    def is_authorized(caller: Optional[Caller]) -> bool:
        if caller is None or not caller.user_id:
            return False
        return caller.role in allowed

    return is_authorized


def protected_procedure(method):
    """Gate a service method behind the service's authorization predicate.

    The predicate runs before the method body, so an unauthorized call never
    touches a repository. The failure message is the same for every procedure.
    """

    @wraps(method)
    def wrapper(self, caller: Optional[Caller], *args, **kwargs):
        if not self._is_authorized(caller):
            raise AuthorizationError(UNAUTHORIZED_MESSAGE)
        return method(self, caller, *args, **kwargs)

    return wrapper
