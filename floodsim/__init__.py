"""Grid-based shallow-water flood simulation over terrain height maps, with map loading, a camera model and mesh building."""

__version__ = "0.1.0"

__all__ = ["__version__"]