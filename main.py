import argparse
import logging
import sys
import time
from typing import Optional, Tuple

import numpy as np
from asciimatics.screen import Screen
from asciimatics.event import KeyboardEvent, MouseEvent
from asciimatics.exceptions import ResizeScreenError
from asciimatics.scene import Scene
from asciimatics.effects import Effect

from config import PainterConfig
from session import (
    ClearAll,
    DrawingSession,
    PointerDown,
    PointerMove,
    PointerUp,
    Resize,
    SetSize,
    SetTool,
    Tool,
    Undo,
)
from ui import UIFrame

log = logging.getLogger(__name__)

# RGB of the 8 basic terminal colours, indexed by their Screen.COLOUR_* value.
_BASIC_RGB = np.array([
    (0, 0, 0),        # COLOUR_BLACK
    (205, 0, 0),      # COLOUR_RED
    (0, 205, 0),      # COLOUR_GREEN
    (205, 205, 0),    # COLOUR_YELLOW
    (0, 0, 238),      # COLOUR_BLUE
    (205, 0, 205),    # COLOUR_MAGENTA
    (0, 205, 205),    # COLOUR_CYAN
    (229, 229, 229),  # COLOUR_WHITE
], dtype=np.int32)

TOOL_KEYS = {ord('b'): Tool.BRUSH, ord('e'): Tool.ERASER, ord('f'): Tool.BUCKET}


def colour_indices(pixels: np.ndarray, use_256: bool) -> np.ndarray:
    """Maps an (h, w, 4) RGBA array to terminal colour numbers."""
    rgb = pixels[:, :, :3].astype(np.int32)
    if use_256:
        # xterm 6x6x6 colour cube starts at index 16.
        cube = (rgb * 5 + 127) // 255
        return 16 + 36 * cube[:, :, 0] + 6 * cube[:, :, 1] + cube[:, :, 2]
    distances = ((rgb[:, :, None, :] - _BASIC_RGB[None, None, :, :]) ** 2).sum(axis=3)
    return distances.argmin(axis=2)

def half_block_render(screen, buffer):
    """Renders the pixel buffer to the screen using half-blocks."""
    indices = colour_indices(buffer.pixels, screen.colours >= 256)
    # Each character cell covers two pixel rows: upper (y) and lower (y+1).
    for y in range(0, min(buffer.height - 1, screen.height * 2), 2):
        row = y // 2
        for x in range(min(buffer.width, screen.width)):
            fg = int(indices[y, x])
            bg = int(indices[y + 1, x])

            # If both halves share the same colour, draw a full-block for crisper output.
            if fg == bg:
                screen.print_at('█', x, row, colour=fg, bg=bg)
            else:
                screen.print_at('▀', x, row, colour=fg, bg=bg)

class CanvasEffect(Effect):
    """Asciimatics Effect that renders the session's pixel buffer using half-block chars."""

    def __init__(self, screen: Screen, session: DrawingSession):
        super().__init__(screen)
        self._session = session

    def reset(self):
        # Nothing to reset between scene restarts.
        pass

    @property
    def stop_frame(self):
        # Run indefinitely; Scene duration is -1.
        return 0

    def _update(self, frame_no):
        half_block_render(self._screen, self._session.buffer)

def route_mouse(event: MouseEvent, pressed: bool, canvas_width: int) -> Tuple[Optional[object], bool]:
    """
    Turns a terminal mouse report into a session pointer event.

    Returns the event to dispatch (or None) and the new pressed flag. Character
    rows map to two pixel rows each; leaving the canvas ends a stroke.
    """
    over_canvas = event.x < canvas_width
    if event.buttons == MouseEvent.LEFT_CLICK and over_canvas:
        pixel_x = event.x
        pixel_y = event.y * 2
        if not pressed:
            return PointerDown(pixel_x, pixel_y), True
        return PointerMove(pixel_x, pixel_y), True
    if pressed:
        return PointerUp(), False
    return None, False

def handle_key(session: DrawingSession, key_code: int, on_save) -> bool:
    """Applies a keyboard shortcut. Returns False when the user asked to quit."""
    if key_code in (ord('q'), ord('Q')):
        return False
    if key_code in TOOL_KEYS:
        session.dispatch(SetTool(TOOL_KEYS[key_code].value))
    elif key_code in (ord('z'), Screen.ctrl("z")):
        session.dispatch(Undo())
    elif key_code in (ord('x'), ord('X')):
        session.dispatch(ClearAll())
    elif key_code == ord('['):
        session.dispatch(SetSize(session.state.size - 1))
    elif key_code == ord(']'):
        session.dispatch(SetSize(session.state.size + 1))
    elif key_code == Screen.ctrl("s"):
        on_save()
    return True

def save_drawing(session: DrawingSession):
    try:
        path = session.export_png()
    except OSError:
        log.exception("could not save drawing")
        return None
    return path

def main(screen, session):
    canvas_width = screen.width - screen.width // 4
    canvas_height = screen.height * 2  # Two pixel rows per character row
    if (session.buffer.width, session.buffer.height) != (canvas_width, canvas_height):
        session.dispatch(Resize(canvas_width, canvas_height))

    ui = UIFrame(screen, session, lambda: save_drawing(session))
    canvas_effect = CanvasEffect(screen, session)
    screen.set_scenes([Scene([canvas_effect, ui], duration=-1)])

    pressed = False
    while True:
        if screen.has_resized():
            raise ResizeScreenError("Screen resized")

        event = screen.get_event()

        # Let the UI consume the event first (e.g., button clicks).
        if event is not None:
            event = ui.process_event(event)

        if isinstance(event, KeyboardEvent):
            if not handle_key(session, event.key_code, lambda: save_drawing(session)):
                return
        elif isinstance(event, MouseEvent):
            ui.has_focus = event.x >= canvas_width
            pointer_event, pressed = route_mouse(event, pressed, canvas_width)
            if pointer_event is not None:
                session.dispatch(pointer_event)

        screen.draw_next_frame()

        # Cap the frame-rate to ~30 FPS to reduce flicker and CPU usage.
        time.sleep(1 / 30)

def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Paint in the terminal with a brush, an eraser and a bucket fill."
    )
    parser.add_argument("--max-history", type=int, default=20, help="undo steps kept in memory")
    parser.add_argument("--brush-size", type=int, default=5)
    parser.add_argument("--output-dir", default=".", help="where Ctrl-S writes PNG files")
    parser.add_argument("--log-file", default="painter.log")
    parser.add_argument(
        "--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"]
    )
    return parser.parse_args(argv)

def build_config(options) -> PainterConfig:
    return PainterConfig(
        max_history=options.max_history,
        brush_size=options.brush_size,
        output_dir=options.output_dir,
    )

def run(argv=None):
    options = parse_args(argv)
    # The terminal belongs to asciimatics, so logs go to a file.
    logging.basicConfig(
        filename=options.log_file,
        level=options.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    session = DrawingSession(build_config(options))
    while True:
        try:
            Screen.wrapper(main, arguments=[session])
            return
        except ResizeScreenError:
            log.debug("screen resized, restarting")

if __name__ == "__main__":
    run(sys.argv[1:])
