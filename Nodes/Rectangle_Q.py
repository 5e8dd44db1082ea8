from dataclasses import dataclass

from Nodes.Point import Point


def trunc_half(value):
    """Divide entre 2 truncando hacia cero (no hacia -inf como //)."""
    if value >= 0:
        return value // 2
    return -((-value) // 2)


@dataclass(frozen=True)
class Rectangle_Q:
    # (center.x, center.y) = centro del rectángulo
    center: Point
    width: int   # ancho completo
    height: int  # alto completo

    @property
    def half_width(self):
        return trunc_half(self.width)

    @property
    def half_height(self):
        return trunc_half(self.height)

    @property
    def left(self):
        return self.center.x - self.half_width

    @property
    def right(self):
        return self.center.x + self.half_width

    @property
    def top(self):
        return self.center.y - self.half_height

    @property
    def bottom(self):
        return self.center.y + self.half_height

    def contains(self, point):
        return (self.left <= point.x <= self.right and
                self.top <= point.y <= self.bottom)

    def intersects(self, range_rect):
        return not (range_rect.left > self.right or
                    range_rect.right < self.left or
                    range_rect.top > self.bottom or
                    range_rect.bottom < self.top)

    def quadrants(self):
        """Devuelve los cuatro cuadrantes en orden NE, NW, SE, SW.

        El norte decrece en y (convención de pantalla). Los cuartos se
        obtienen truncando dos veces: (ancho / 2) / 2.
        """
        half_w, half_h = self.half_width, self.half_height
        quarter_w, quarter_h = trunc_half(half_w), trunc_half(half_h)
        x, y = self.center.x, self.center.y

        ne = Rectangle_Q(Point(x + quarter_w, y - quarter_h), half_w, half_h)
        nw = Rectangle_Q(Point(x - quarter_w, y - quarter_h), half_w, half_h)
        se = Rectangle_Q(Point(x + quarter_w, y + quarter_h), half_w, half_h)
        sw = Rectangle_Q(Point(x - quarter_w, y + quarter_h), half_w, half_h)
        return ne, nw, se, sw

    def to_dict(self):
        return {"center": self.center.to_dict(), "width": self.width, "height": self.height}
