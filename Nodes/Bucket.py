class Bucket:
    """Buffer de puntos de solo-anexado con capacidad fija."""

    def __init__(self, capacity=4):
        self.points = []
        self.capacity = capacity

    def insert(self, point):
        if len(self.points) < self.capacity:
            self.points.append(point)
            return True
        return False

    def is_full(self):
        return len(self.points) >= self.capacity

    def __len__(self):
        return len(self.points)

    def __iter__(self):
        return iter(self.points)

    def __repr__(self):
        return f"Bucket({self.points})"
