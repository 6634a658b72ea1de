# solvers/editor.py
#
# Point-wise editing of the string shape. The presentation layer maps
# pointer coordinates to a grid index and a displacement; only the
# resolved (index, value) pair arrives here.

import enum
import logging
from typing import Callable, NamedTuple, Optional, Union

from solvers.config import STATUS_TEXT
from solvers.grid import StringGrid

logger = logging.getLogger(__name__)


class Mode(str, enum.Enum):
    RUNNING = "running"
    EDITING = "editing"

    @property
    def status(self) -> str:
        return STATUS_TEXT[self.value]


class EditResult(NamedTuple):
    applied: bool
    redraw: bool


class StringEditor:
    """
    Applies edits to a grid and tracks the Running / Editing mode.

    Stepping continues in both modes. In EDITING mode every edit also asks
    the renderer for an immediate redraw through the ``redraw`` callback.
    """

    def __init__(
        self,
        grid: StringGrid,
        redraw: Optional[Callable[[], None]] = None,
        mode: Mode = Mode.RUNNING,
    ):
        self.grid = grid
        self.redraw = redraw
        self.mode = mode

    def set_mode(self, mode: Union[Mode, str]) -> Mode:
        mode = Mode(mode)
        if mode is not self.mode:
            self.mode = mode
            logger.info("New string status: %s", mode.status)
        return self.mode

    def toggle(self) -> Mode:
        if self.mode is Mode.RUNNING:
            return self.set_mode(Mode.EDITING)
        return self.set_mode(Mode.RUNNING)

    def edit(self, index: int, value: float) -> EditResult:
        applied = self.grid.set_point(index, value)

        if self.mode is not Mode.EDITING:
            return EditResult(applied, False)

        if self.redraw is not None:
            self.redraw()
        return EditResult(applied, True)
