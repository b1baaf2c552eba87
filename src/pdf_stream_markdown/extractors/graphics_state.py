"""
Affine matrices and the graphics state snapshot used while interpreting a page.
"""

from dataclasses import dataclass, replace
from typing import Tuple

from ..models import LineSegment, Point


@dataclass(frozen=True)
class Matrix:
    """
    Affine transformation ``[a b 0; c d 0; e f 1]`` in PDF component order.

    ``m.multiply(n)`` yields the transform that applies ``n`` first and then
    ``m``, so ``ctm.multiply(tm)`` maps text space into page space.
    """
    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    @classmethod
    def identity(cls) -> "Matrix":
        return cls()

    @classmethod
    def translation(cls, tx: float, ty: float) -> "Matrix":
        return cls(1.0, 0.0, 0.0, 1.0, tx, ty)

    def multiply(self, other: "Matrix") -> "Matrix":
        return Matrix(
            a=self.a * other.a + self.c * other.b,
            b=self.b * other.a + self.d * other.b,
            c=self.a * other.c + self.c * other.d,
            d=self.b * other.c + self.d * other.d,
            e=self.a * other.e + self.c * other.f + self.e,
            f=self.b * other.e + self.d * other.f + self.f,
        )

    def apply(self, x: float, y: float) -> Point:
        return (self.a * x + self.c * y + self.e, self.b * x + self.d * y + self.f)

    @property
    def origin(self) -> Point:
        return (self.e, self.f)


IDENTITY = Matrix.identity()


@dataclass(frozen=True)
class GraphicsState:
    """
    Immutable snapshot of the interpreter's coordinate state.

    Every operation returns a new state so snapshots can be pushed on a plain
    stack for ``q``/``Q``.

    Attributes:
        ctm: Current transformation matrix
        tm: Text matrix
        leading: Vertical advance used by ``T*``
        current_point: Current path point in user space (untransformed)
        subpath_start: Start of the current subpath, target of ``h``
    """
    ctm: Matrix = IDENTITY
    tm: Matrix = IDENTITY
    leading: float = 0.0
    current_point: Point = (0.0, 0.0)
    subpath_start: Point = (0.0, 0.0)

    # Text object and text positioning

    def begin_text(self) -> "GraphicsState":
        return replace(self, tm=IDENTITY)

    def set_leading(self, leading: float) -> "GraphicsState":
        return replace(self, leading=leading)

    def move_text(self, tx: float, ty: float) -> "GraphicsState":
        return replace(self, tm=self.tm.multiply(Matrix.translation(tx, ty)))

    def move_text_set_leading(self, tx: float, ty: float) -> "GraphicsState":
        return replace(self.move_text(tx, ty), leading=-ty)

    def set_text_matrix(self, matrix: Matrix) -> "GraphicsState":
        return replace(self, tm=matrix)

    def next_line(self) -> "GraphicsState":
        return self.move_text(0.0, -self.leading)

    def set_ctm(self, matrix: Matrix) -> "GraphicsState":
        return replace(self, ctm=matrix)

    def concat_ctm(self, matrix: Matrix) -> "GraphicsState":
        return replace(self, ctm=self.ctm.multiply(matrix))

    @property
    def text_position(self) -> Point:
        """Origin of the text space mapped into page space."""
        return self.ctm.multiply(self.tm).origin

    # Path construction

    def move_to(self, x: float, y: float) -> "GraphicsState":
        return replace(self, current_point=(x, y), subpath_start=(x, y))

    def line_to(self, x: float, y: float) -> Tuple["GraphicsState", LineSegment]:
        segment = self._segment(self.current_point, (x, y))
        return replace(self, current_point=(x, y)), segment

    def close_path(self) -> Tuple["GraphicsState", LineSegment]:
        segment = self._segment(self.current_point, self.subpath_start)
        return replace(self, current_point=self.subpath_start), segment

    def rectangle(self, x: float, y: float, width: float, height: float) -> Tuple["GraphicsState", Tuple[LineSegment, ...]]:
        corners = [(x, y), (x + width, y), (x + width, y + height), (x, y + height)]
        edges = tuple(
            self._segment(corners[i], corners[(i + 1) % 4])
            for i in range(4)
        )
        return self.move_to(x, y), edges

    def advance_to(self, x: float, y: float) -> "GraphicsState":
        """Move the current point without drawing (curve endpoints)."""
        return replace(self, current_point=(x, y))

    def _segment(self, start: Point, end: Point) -> LineSegment:
        return LineSegment(self.ctm.apply(*start), self.ctm.apply(*end))
