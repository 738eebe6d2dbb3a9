from dataclasses import dataclass, field
from typing import List


@dataclass
class PainterConfig:
    width: int = 640
    height: int = 400
    background: str = "#ffffff"
    color: str = "#11111b"
    tool: str = "brush"
    brush_size: int = 5
    max_brush_size: int = 50
    max_history: int = 20
    output_dir: str = "."
    palette: List[str] = field(
        default_factory=lambda: [
            "#11111b", "#f38ba8", "#fab387", "#f9e2af", "#a6e3a1",
            "#94e2d5", "#89b4fa", "#cba6f7", "#f5c2e7", "#f2cdcd",
        ]
    )
