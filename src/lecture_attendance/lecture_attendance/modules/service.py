from __future__ import annotations

from typing import Optional, Sequence

from ..common.auth import AuthorizationPredicate, Caller, protected_procedure
from .model import Module
from .repository import ModuleRepository


class ModuleService:
    def __init__(self, modules: ModuleRepository, *, is_authorized: AuthorizationPredicate):
        self._modules = modules
        self._is_authorized = is_authorized

    @protected_procedure
    def get_all_modules(self, caller: Optional[Caller]) -> Sequence[Module]:
        return self._modules.find_all()
