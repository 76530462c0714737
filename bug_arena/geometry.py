def in_range(value, low, high):
    return low <= value <= high


def overlaps(a, b):
    """Axis-aligned bounding-box test on ``left/right/top/bottom`` edges.

    Edges touching counts as a hit. Symmetric in its arguments.
    """
    horizontal = (
        in_range(a.left, b.left, b.right)
        or in_range(a.right, b.left, b.right)
        or in_range(b.left, a.left, a.right)
        or in_range(b.right, a.left, a.right)
    )
    if not horizontal:
        return False
    return (
        in_range(a.top, b.top, b.bottom)
        or in_range(a.bottom, b.top, b.bottom)
        or in_range(b.top, a.top, a.bottom)
        or in_range(b.bottom, a.top, a.bottom)
    )


class Box:
    """Mixin giving an entity collision edges from ``x, y, width, height``."""

    @property
    def left(self):
        return self.x

    @property
    def right(self):
        return self.x + self.width

    @property
    def top(self):
        return self.y

    @property
    def bottom(self):
        return self.y + self.height

    @property
    def cell(self):
        return (self.x, self.y)
