"""BSP tree over 3D triangles for segment intersection queries."""

__version__ = "0.1.0"
__all__ = ["__version__"]