"""Canvas abstraction for the dashboard - swap the PNG renderer for an in-memory test backend."""
from abc import ABC, abstractmethod
from typing import Dict, List, Sequence, Tuple

from PIL import Image, ImageDraw, ImageFont

Color = Tuple[int, int, int]
Point = Tuple[int, int]


class DashboardCanvas(ABC):
    """Abstract drawing surface for the dashboard."""

    @property
    @abstractmethod
    def width(self) -> int:
        """Get canvas width in pixels."""
        pass

    @property
    @abstractmethod
    def height(self) -> int:
        """Get canvas height in pixels."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Reset the canvas to its background color."""
        pass

    @abstractmethod
    def draw_text(self, x: int, y: int, text: str, color: Color, size: int = 14) -> None:
        """
        Draw text with its top-left corner at (x, y).

        Args:
            x: X position
            y: Y position
            text: Text to draw
            color: (r, g, b) tuple
            size: Font size in pixels
        """
        pass

    @abstractmethod
    def draw_line(self, points: Sequence[Point], color: Color, width: int = 1) -> None:
        """Draw a polyline through the given points."""
        pass

    @abstractmethod
    def draw_rect(self, x0: int, y0: int, x1: int, y1: int, color: Color) -> None:
        """Draw a filled rectangle."""
        pass


class FakeDashboardCanvas(DashboardCanvas):
    """
    Canvas that records drawing operations in memory.

    Useful for unit tests and headless runs.
    """

    def __init__(self, width: int = 960, height: int = 640):
        self._width = width
        self._height = height
        self.operations: List[Dict] = []

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def clear(self) -> None:
        self.operations = []

    def draw_text(self, x: int, y: int, text: str, color: Color, size: int = 14) -> None:
        self.operations.append({"op": "text", "x": x, "y": y, "text": text, "color": color, "size": size})

    def draw_line(self, points: Sequence[Point], color: Color, width: int = 1) -> None:
        self.operations.append({"op": "line", "points": list(points), "color": color, "width": width})

    def draw_rect(self, x0: int, y0: int, x1: int, y1: int, color: Color) -> None:
        self.operations.append({"op": "rect", "box": (x0, y0, x1, y1), "color": color})

    def texts(self) -> List[str]:
        """All text drawn so far, in drawing order (for testing)."""
        return [op["text"] for op in self.operations if op["op"] == "text"]


class PILDashboardCanvas(DashboardCanvas):
    """
    Pillow-based canvas for rendering the dashboard to a PNG image.
    """

    def __init__(self, width: int = 960, height: int = 640, background: Color = (30, 64, 175)):
        """
        Initialize PIL canvas.

        Args:
            width: Image width in pixels
            height: Image height in pixels
            background: Fill color used by clear()
        """
        self._width = width
        self._height = height
        self._background = background
        self._fonts: Dict[int, ImageFont.ImageFont] = {}
        self._image = Image.new("RGB", (width, height), background)
        self._draw = ImageDraw.Draw(self._image)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def clear(self) -> None:
        self._image = Image.new("RGB", (self._width, self._height), self._background)
        self._draw = ImageDraw.Draw(self._image)

    def draw_text(self, x: int, y: int, text: str, color: Color, size: int = 14) -> None:
        self._draw.text((x, y), text, fill=color, font=self._font(size))

    def draw_line(self, points: Sequence[Point], color: Color, width: int = 1) -> None:
        if len(points) > 1:
            self._draw.line(list(points), fill=color, width=width)

    def draw_rect(self, x0: int, y0: int, x1: int, y1: int, color: Color) -> None:
        self._draw.rectangle((x0, y0, x1, y1), fill=color)

    def save(self, filename: str) -> None:
        """Save canvas to a PNG file."""
        self._image.save(filename)

    def get_image(self):
        """Get the PIL Image object (for advanced usage)."""
        return self._image

    def _font(self, size: int):
        if size not in self._fonts:
            try:
                self._fonts[size] = ImageFont.truetype("DejaVuSans.ttf", size)
            except OSError:
                self._fonts[size] = ImageFont.load_default()
        return self._fonts[size]
