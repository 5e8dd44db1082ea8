from typing import NamedTuple

from Nodes.Bucket import Bucket
from Nodes.Point import Point
from Nodes.Rectangle_Q import Rectangle_Q
from constants import QUADTREE_CAPACITY, QUADTREE_MAX_DEPTH
from logger import logger
from trees.serializer import points_to_json, query_all_to_json, rects_to_json


class Quadrants(NamedTuple):
    # el orden de los campos es el orden de inserción y de recorrido
    northeast: "QuadTree"
    northwest: "QuadTree"
    southeast: "QuadTree"
    southwest: "QuadTree"


class QuadTree:
    """Quadtree de región sobre puntos enteros.

    Un nodo es una hoja (children es None) o un nodo interno con sus cuatro
    hijos en un único Quadrants; no hay estado intermedio.
    """

    def __init__(self, boundary, capacity=QUADTREE_CAPACITY, max_depth=QUADTREE_MAX_DEPTH, depth=0):
        self.boundary = boundary
        self.capacity = capacity
        self.max_depth = max_depth
        self.depth = depth
        self.points = Bucket(capacity)
        self.children = None

    @property
    def divided(self):
        return self.children is not None

    # hijos
    @property
    def northeast(self):
        return self.children.northeast if self.children else None

    @property
    def northwest(self):
        return self.children.northwest if self.children else None

    @property
    def southeast(self):
        return self.children.southeast if self.children else None

    @property
    def southwest(self):
        return self.children.southwest if self.children else None

    def subdivide(self):
        if self.divided:
            logger.debug("Subdividiendo de nuevo %s: se reemplazan los hijos", self.boundary)

        ne, nw, se, sw = self.boundary.quadrants()
        self.children = Quadrants(
            QuadTree(ne, self.capacity, self.max_depth, self.depth + 1),
            QuadTree(nw, self.capacity, self.max_depth, self.depth + 1),
            QuadTree(se, self.capacity, self.max_depth, self.depth + 1),
            QuadTree(sw, self.capacity, self.max_depth, self.depth + 1),
        )
        logger.debug("Subdividido %s a profundidad %d", self.boundary, self.depth)

    def insert(self, point):
        if not self.boundary.contains(point):
            return False

        if self.points.insert(point):
            return True

        if not self.divided:
            if self.max_depth is not None and self.depth >= self.max_depth:
                logger.warning("Profundidad máxima %d alcanzada, se descarta %s", self.max_depth, point)
                return False
            self.subdivide()

        for child in self.children:
            if child.insert(point):
                return True

        return False

    def query(self, range_rect, found=None):
        if found is None:
            found = []

        if not self.boundary.intersects(range_rect):
            return found

        for p in self.points:
            if range_rect.contains(p):
                found.append(p)

        if self.divided:
            for child in self.children:
                child.query(range_rect, found)

        return found

    def query_rects(self, found=None):
        if found is None:
            found = []

        found.append(self.boundary)

        if self.divided:
            for child in self.children:
                child.query_rects(found)

        return found

    # --- canales serializados ---
    def query_json(self, range_rect, strict=False):
        return points_to_json(self.query(range_rect), strict=strict)

    def query_rects_json(self, strict=False):
        return rects_to_json(self.query_rects(), strict=strict)

    def query_all_json(self, range_rect, strict=False):
        """Puntos dentro de range_rect y todos los límites, en un solo objeto JSON."""
        return query_all_to_json(self.query(range_rect), self.query_rects(), strict=strict)

    # --- inspección ---
    def nodes(self):
        """Recorre los nodos en preorden (NE, NW, SE, SW)."""
        yield self
        if self.divided:
            for child in self.children:
                yield from child.nodes()

    def node_count(self):
        return sum(1 for _ in self.nodes())

    def internal_count(self):
        return sum(1 for node in self.nodes() if node.divided)

    def leaf_count(self):
        return sum(1 for node in self.nodes() if not node.divided)

    def height(self):
        return max(node.depth for node in self.nodes()) - self.depth

    def __len__(self):
        return sum(len(node.points) for node in self.nodes())

    def __repr__(self):
        return f"QuadTree(boundary={self.boundary}, capacity={self.capacity}, points={len(self)})"


def make_root(cx, cy, width, height, capacity=QUADTREE_CAPACITY, max_depth=QUADTREE_MAX_DEPTH):
    """Crea un árbol raíz a partir del centro y el tamaño de su límite."""
    return QuadTree(Rectangle_Q(Point(cx, cy), width, height), capacity, max_depth)
