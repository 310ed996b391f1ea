from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Module
from .repository import ModuleRepository


class MySQLModuleRepository(ModuleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_all(self) -> Sequence[Module]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT module_id, module_name FROM modules ORDER BY module_id")
            rows = fetchall(cur)
            return [Module(module_id=r["module_id"], module_name=r["module_name"]) for r in rows]

    def get_by_id(self, module_id: str) -> Optional[Module]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT module_id, module_name FROM modules WHERE module_id=%s", (module_id,))
            r = fetchone(cur)
            if not r:
                return None
            return Module(module_id=r["module_id"], module_name=r["module_name"])
