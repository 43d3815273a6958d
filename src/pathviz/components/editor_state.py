"""Editor context: the tool being painted, the pointer button and the keyboard cursor."""
from dataclasses import dataclass
from enum import Enum

from pathviz.components.cell_role import CellRole


class EditTool(Enum):
    EMPTY = "empty"
    BLOCKED = "blocked"
    START = "start"
    END = "end"

    @property
    def role(self) -> CellRole:
        return CellRole(self.value)


@dataclass(slots=True)
class EditorState:
    """Singleton component read by the editor on every paint action."""
    tool: EditTool = EditTool.BLOCKED
    button_held: bool = False
    cursor: tuple[int, int] = (0, 0)
    # While armed, moving the cursor paints Empty/Blocked into each cell it enters.
    cursor_armed: bool = False


PAINT_TOOLS = (EditTool.EMPTY, EditTool.BLOCKED)
