from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Module:
    module_id: str
    module_name: str

    def to_dict(self) -> dict:
        return {"moduleId": self.module_id, "moduleName": self.module_name}
