from asciimatics.widgets import Frame, Layout, Divider, Button, DropdownList, Label

from session import ClearAll, SetColor, SetSize, SetTool, Tool, Undo

# NOTE: renamed to avoid clashing with Frame.palette attribute.
class ColorPalette:
    """
    A column of preset colour buttons.
    """
    def __init__(self, frame, colors, dispatch):
        self.frame = frame
        self.dispatch = dispatch
        self.colors = list(colors)

        layout = Layout([1])
        self.frame.add_layout(layout)
        layout.add_widget(Label("Colour:"))
        for color in self.colors:
            # Bind the current colour value through a default argument.
            button = Button(color, on_click=lambda c=color: self._select_color(c))
            layout.add_widget(button)

    def _select_color(self, color):
        self.dispatch(SetColor(color))

class ToolSelector:
    """
    One button per drawing tool.
    """
    def __init__(self, frame, dispatch):
        self.frame = frame
        self.dispatch = dispatch

        layout = Layout([1])
        self.frame.add_layout(layout)
        layout.add_widget(Label("Tool:"))
        for tool in Tool:
            button = Button(tool.value.title(), on_click=lambda t=tool: self.dispatch(SetTool(t.value)))
            layout.add_widget(button)

class BrushSizeSelector:
    """
    A simple dropdown list to choose brush size.
    """

    def __init__(self, frame, dispatch, max_size, current):
        self.frame = frame
        self.dispatch = dispatch

        layout = Layout([1])
        self.frame.add_layout(layout)

        # Create dropdown options as list of tuples (display_text, value)
        sizes = [(str(i), i) for i in range(1, max_size + 1)]

        def _on_change():
            self.dispatch(SetSize(self.dropdown.value))

        self.dropdown = DropdownList(sizes, label="Size:", on_change=_on_change)
        layout.add_widget(self.dropdown)
        self.dropdown.value = current

class UIFrame(Frame):
    """
    The side panel with palette, tools, size and canvas actions.
    """
    def __init__(self, screen, session, on_save):
        super(UIFrame, self).__init__(
            screen,
            screen.height,
            screen.width // 4,
            x=screen.width - screen.width // 4,
            y=0,
            has_border=True,
            name="UI"
        )
        # Track whether the UI currently has focus (e.g., the mouse is over the UI region)
        self.has_focus: bool = False

        config = session.config
        self.tool_selector = ToolSelector(self, session.dispatch)
        self.color_palette = ColorPalette(self, config.palette, session.dispatch)
        self.brush_selector = BrushSizeSelector(
            self, session.dispatch, config.max_brush_size, session.state.size
        )

        layout = Layout([1])
        self.add_layout(layout)
        layout.add_widget(Divider())
        layout.add_widget(Button("Undo", on_click=lambda: session.dispatch(Undo())))
        layout.add_widget(Button("Clear", on_click=lambda: session.dispatch(ClearAll())))
        layout.add_widget(Button("Save", on_click=on_save))
        self.fix()
