"""User-placed measurement boxes.

A box lives in display space. Dragging grabs the edges nearest the touch
point (left or right, top or bottom) and moves them with the drag, so a
box can be both moved and resized from any corner.
"""

from dataclasses import dataclass, field
from enum import Enum

from qrmeasure.core.geometry import Point, Rectangle, Size


class HorizontalEdge(Enum):
    LEFT = "left"
    RIGHT = "right"


class VerticalEdge(Enum):
    TOP = "top"
    BOTTOM = "bottom"


@dataclass
class MeasuredBox:
    """A display-space rectangle and its last computed size label."""

    rect: Rectangle
    label: str = ""
    _last_point: Point | None = field(default=None, init=False, repr=False)
    _edge_x: HorizontalEdge = field(default=HorizontalEdge.LEFT, init=False, repr=False)
    _edge_y: VerticalEdge = field(default=VerticalEdge.TOP, init=False, repr=False)

    @classmethod
    def centered_in(
        cls, display_size: Size, width: float = 100.0, height: float = 100.0
    ) -> "MeasuredBox":
        """Create a box of the given size centred in the display area."""
        x = display_size.width / 2.0 - width / 2.0
        y = display_size.height / 2.0 - height / 2.0
        return cls(rect=Rectangle(x, y, width, height))

    @property
    def dragging(self) -> bool:
        return self._last_point is not None

    @property
    def grabbed_edges(self) -> tuple[HorizontalEdge, VerticalEdge]:
        return self._edge_x, self._edge_y

    def begin_drag(self, point: Point):
        """Start a drag, grabbing the edges on the touch point's side of centre."""
        center = self.rect.center
        self._edge_x = HorizontalEdge.RIGHT if point.x > center.x else HorizontalEdge.LEFT
        self._edge_y = VerticalEdge.BOTTOM if point.y > center.y else VerticalEdge.TOP
        self._last_point = point

    def drag_to(self, point: Point) -> Rectangle:
        """Move the grabbed edges by the distance moved since the last point."""
        if self._last_point is None:
            self.begin_drag(point)
            return self.rect

        dx = point.x - self._last_point.x
        dy = point.y - self._last_point.y
        x, y = self.rect.x, self.rect.y
        width, height = self.rect.width, self.rect.height

        if self._edge_x is HorizontalEdge.LEFT:
            x += dx
            width -= dx
        else:
            width += dx

        if self._edge_y is VerticalEdge.TOP:
            y += dy
            height -= dy
        else:
            height += dy

        self._last_point = point
        self.rect = Rectangle(x, y, width, height)
        return self.rect

    def end_drag(self):
        self._last_point = None
