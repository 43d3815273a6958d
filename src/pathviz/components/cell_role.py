"""Symbolic cell roles and the code table used on the pathfinding wire."""
from enum import Enum
from typing import Dict


class CellRole(Enum):
    EMPTY = "empty"
    BLOCKED = "blocked"
    START = "start"
    END = "end"
    PATH = "path"

    @property
    def code(self) -> str:
        return ROLE_TO_CODE[self]

    @classmethod
    def from_code(cls, code: str) -> "CellRole":
        try:
            return CODE_TO_ROLE[code]
        except KeyError as exc:
            raise ValueError(f"Unknown cell role code '{code}'") from exc

    @property
    def is_endpoint(self) -> bool:
        return self in (CellRole.START, CellRole.END)


ROLE_TO_CODE: Dict[CellRole, str] = {
    CellRole.EMPTY: "E",
    CellRole.BLOCKED: "B",
    CellRole.START: "S",
    CellRole.END: "T",
    CellRole.PATH: "P",
}
CODE_TO_ROLE: Dict[str, CellRole] = {v: k for k, v in ROLE_TO_CODE.items()}
