from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Module


class ModuleRepository(Protocol):
    """Modules are referenced by lectures and never mutated here."""

    def find_all(self) -> Sequence[Module]:
        raise NotImplementedError

    def get_by_id(self, module_id: str) -> Optional[Module]:
        raise NotImplementedError
