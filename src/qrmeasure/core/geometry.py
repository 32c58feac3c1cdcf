"""Plane geometry for QRMeasure.

Rectangles, points and sizes, plus the affine map between the photo's
native pixel space (where calibration and measurement happen) and the
display space where the photo is shown aspect-fit inside a view.
"""

import math
from dataclasses import dataclass

from qrmeasure.core.errors import InvalidRectangleError


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Size:
    width: float
    height: float


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned rectangle: origin (x, y) plus width and height."""

    x: float
    y: float
    width: float
    height: float

    @property
    def min_x(self) -> float:
        return self.x

    @property
    def min_y(self) -> float:
        return self.y

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return Point(self.x + self.width / 2.0, self.y + self.height / 2.0)

    def corners(self) -> list[Point]:
        return [
            Point(self.min_x, self.min_y),
            Point(self.max_x, self.min_y),
            Point(self.max_x, self.max_y),
            Point(self.min_x, self.max_y),
        ]

    def is_valid(self) -> bool:
        """True when no component is NaN and width/height are non-negative."""
        if any(math.isnan(v) for v in (self.x, self.y, self.width, self.height)):
            return False
        return self.width >= 0 and self.height >= 0

    def validate(self) -> "Rectangle":
        """Return self, or raise InvalidRectangleError."""
        if not self.is_valid():
            raise InvalidRectangleError(f"Invalid rectangle: {self}")
        return self

    @classmethod
    def from_points(cls, points) -> "Rectangle":
        """Smallest rectangle containing all of the given (x, y) points."""
        xs = [float(p[0]) for p in points]
        ys = [float(p[1]) for p in points]
        if not xs:
            raise ValueError("Cannot build a rectangle from no points")
        return cls(min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))

    def __str__(self) -> str:
        return f"(x: {self.x:g}, y: {self.y:g}, w: {self.width:g}, h: {self.height:g})"


@dataclass(frozen=True)
class AffineTransform:
    """2D affine map: x' = a*x + c*y + tx, y' = b*x + d*y + ty."""

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    tx: float = 0.0
    ty: float = 0.0

    @classmethod
    def identity(cls) -> "AffineTransform":
        return cls()

    def concatenating(self, other: "AffineTransform") -> "AffineTransform":
        """Return the transform that applies self first, then other."""
        return AffineTransform(
            a=self.a * other.a + self.b * other.c,
            b=self.a * other.b + self.b * other.d,
            c=self.c * other.a + self.d * other.c,
            d=self.c * other.b + self.d * other.d,
            tx=self.tx * other.a + self.ty * other.c + other.tx,
            ty=self.tx * other.b + self.ty * other.d + other.ty,
        )

    def translated_by(self, x: float, y: float) -> "AffineTransform":
        """Prepend a translation, as in ``identity().translated_by(...)``."""
        return AffineTransform(tx=x, ty=y).concatenating(self)

    def scaled_by(self, sx: float, sy: float) -> "AffineTransform":
        """Prepend a scale: points are scaled before the existing map applies."""
        return AffineTransform(a=sx, d=sy).concatenating(self)

    @property
    def determinant(self) -> float:
        return self.a * self.d - self.b * self.c

    def inverted(self) -> "AffineTransform":
        det = self.determinant
        if det == 0 or math.isnan(det):
            raise ValueError("Affine transform is not invertible")
        a = self.d / det
        b = -self.b / det
        c = -self.c / det
        d = self.a / det
        return AffineTransform(
            a=a,
            b=b,
            c=c,
            d=d,
            tx=-(self.tx * a + self.ty * c),
            ty=-(self.tx * b + self.ty * d),
        )

    def apply_to_point(self, point: Point) -> Point:
        return Point(
            self.a * point.x + self.c * point.y + self.tx,
            self.b * point.x + self.d * point.y + self.ty,
        )

    def apply_to_rect(self, rect: Rectangle) -> Rectangle:
        """Bounding box of the rectangle's four transformed corners."""
        corners = [self.apply_to_point(p) for p in rect.corners()]
        return Rectangle.from_points([(p.x, p.y) for p in corners])


def aspect_fit_transform(image_size: Size, display_size: Size) -> AffineTransform:
    """Map image pixel space onto a display area with aspect-fit placement.

    The image is scaled uniformly by the smaller of the width and height
    ratios, then centred by half the leftover margin on each axis. Invert
    the result to map display coordinates back into image pixels.
    """
    if image_size.width <= 0 or image_size.height <= 0:
        raise ValueError(f"Image size must be positive, got {image_size}")
    if display_size.width <= 0 or display_size.height <= 0:
        raise ValueError(f"Display size must be positive, got {display_size}")

    scale = min(
        display_size.width / image_size.width,
        display_size.height / image_size.height,
    )
    x_margin = (display_size.width - image_size.width * scale) / 2.0
    y_margin = (display_size.height - image_size.height * scale) / 2.0

    return AffineTransform.identity().translated_by(x_margin, y_margin).scaled_by(scale, scale)
