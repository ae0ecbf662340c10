"""Custom exceptions for the relief package."""


class ReliefError(Exception):
    """Base exception for relief package."""

    pass


class ConfigurationError(ReliefError):
    """Invalid terrain, noise or gradient configuration."""

    pass


class GradientError(ReliefError):
    """Colour gradient could not be built."""

    pass


class ImageConversionError(ReliefError):
    """Rasterized gradient could not be converted to a texture buffer."""

    pass


class MeshGenerationError(ReliefError):
    """Mesh generation failed."""

    pass


class DataLoadError(ReliefError):
    """Failed to load data from file."""

    pass


class ExportError(ReliefError):
    """Terrain geometry could not be exported."""

    pass
