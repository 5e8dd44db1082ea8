from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    """Punto 2D de coordenadas enteras."""
    x: int
    y: int

    def to_dict(self):
        return {"x": self.x, "y": self.y}
