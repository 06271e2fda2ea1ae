"""Exceptions and warnings raised by the layout."""


class LayoutError(Exception):
    """Base class for layout errors."""
    pass


class EmptyComponentError(LayoutError, ValueError):
    """A component was built without vertices."""
    pass


class SelfLoopError(LayoutError, ValueError):
    """A vertex links to itself and self-loops are rejected."""
    pass


class PlacementError(LayoutError, RuntimeError):
    """Placement was repeated, or results were read before placement."""
    pass


class OverlapWarning(UserWarning):
    """Collapsing left a component overlapping an already settled one."""
    pass
