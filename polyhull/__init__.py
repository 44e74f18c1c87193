"""Three-dimensional convex hulls computed with the QuickHull algorithm."""

__version__ = "0.1.0"