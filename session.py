"""
Drawing session: the tool state machine that sits between input events and
the pixel buffer.

Every event is handled to completion by `DrawingSession.dispatch` before the
next one is looked at. Mutating actions (stroke start, bucket fill, clear)
snapshot history first so that one undo reverts exactly one action.
"""
import logging
import math
import os
import time
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from canvas import PixelBuffer, parse_hex_color
from config import PainterConfig
from fill import flood_fill
from history import HistoryStack

log = logging.getLogger(__name__)


class Tool(str, Enum):
    BRUSH = "brush"
    ERASER = "eraser"
    BUCKET = "bucket"


@dataclass(frozen=True)
class PointerDown:
    x: float
    y: float


@dataclass(frozen=True)
class PointerMove:
    x: float
    y: float


@dataclass(frozen=True)
class PointerUp:
    pass


@dataclass(frozen=True)
class SetTool:
    name: str


@dataclass(frozen=True)
class SetColor:
    color: str


@dataclass(frozen=True)
class SetSize:
    size: int


@dataclass(frozen=True)
class Undo:
    pass


@dataclass(frozen=True)
class ClearAll:
    pass


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


@dataclass
class SessionState:
    tool: Tool = Tool.BRUSH
    color: str = "#11111b"
    size: int = 5
    drawing: bool = False
    last_point: Optional[Tuple[int, int]] = None


class DrawingSession:
    def __init__(self, config: Optional[PainterConfig] = None):
        self.config = config or PainterConfig()
        self.background = parse_hex_color(self.config.background)
        self.buffer = PixelBuffer(self.config.width, self.config.height, self.background)
        self.history = HistoryStack(self.config.max_history)
        self.state = SessionState(
            tool=Tool(self.config.tool),
            color=self.config.color,
            size=self._clamp_size(self.config.brush_size),
        )

    def dispatch(self, event):
        """Routes one input event to the matching operation."""
        if isinstance(event, PointerDown):
            self.pointer_down(event.x, event.y)
        elif isinstance(event, PointerMove):
            self.pointer_move(event.x, event.y)
        elif isinstance(event, PointerUp):
            self.pointer_up()
        elif isinstance(event, SetTool):
            self.set_tool(event.name)
        elif isinstance(event, SetColor):
            self.set_color(event.color)
        elif isinstance(event, SetSize):
            self.set_size(event.size)
        elif isinstance(event, Undo):
            self.undo()
        elif isinstance(event, ClearAll):
            self.clear_all()
        elif isinstance(event, Resize):
            self.resize(event.width, event.height)
        else:
            raise TypeError(f"unsupported event: {event!r}")

    # --- pointer ---------------------------------------------------------

    def pointer_down(self, x, y):
        px, py = math.floor(x), math.floor(y)
        if self.state.tool is Tool.BUCKET:
            self.history.save(self.buffer)
            flood_fill(self.buffer, px, py, parse_hex_color(self.state.color))
            return

        self.history.save(self.buffer)
        self.state.drawing = True
        self.state.last_point = (px, py)
        # A tap with no movement still leaves a mark.
        self.buffer.stamp(px, py, self.state.size, self._stroke_color())

    def pointer_move(self, x, y):
        if not self.state.drawing:
            return
        px, py = int(round(x)), int(round(y))
        x0, y0 = self.state.last_point
        self.buffer.stroke_segment(x0, y0, px, py, self.state.size, self._stroke_color())
        self.state.last_point = (px, py)

    def pointer_up(self):
        self.state.drawing = False
        self.state.last_point = None

    # --- palette / tool selection ----------------------------------------

    def set_tool(self, name):
        self.state.tool = Tool(name)

    def set_color(self, color):
        self.state.color = color
        if self.state.tool is Tool.ERASER:
            self.state.tool = Tool.BRUSH

    def set_size(self, size):
        self.state.size = self._clamp_size(int(size))

    # --- whole-buffer actions --------------------------------------------

    def undo(self):
        self.pointer_up()
        if self.history.undo(self.buffer) is None:
            log.debug("undo requested with empty history")

    def clear_all(self):
        self.history.save(self.buffer)
        self.buffer.fill_all(self.background)

    def resize(self, width, height):
        """Reallocates the buffer; existing snapshots no longer fit and are dropped."""
        self.pointer_up()
        self.buffer = PixelBuffer(width, height, self.background)
        self.history.clear()
        log.info("canvas resized to %dx%d", width, height)

    def export_png(self, path=None):
        if path is None:
            name = f"drawing-{int(time.time() * 1000)}.png"
            path = os.path.join(self.config.output_dir, name)
        self.buffer.save_png(path)
        return path

    def _stroke_color(self):
        if self.state.tool is Tool.ERASER:
            return self.background
        return parse_hex_color(self.state.color)

    def _clamp_size(self, size):
        return max(1, min(self.config.max_brush_size, size))
