"""Collection-level failures raised by the geometry pipeline.

Record-level problems (a bad ring, an unusable multipolygon part, a cell
that cannot be built) are logged and skipped, never raised.
"""


class GeometryPipelineError(Exception):
    """Base class for districtmap errors."""


class InvalidInputError(GeometryPipelineError, ValueError):
    """A collection holds no usable coordinates."""


class DegenerateBoundsError(InvalidInputError):
    """Bounds have zero width and zero height, so no scale can be derived."""


class PreconditionError(GeometryPipelineError, RuntimeError):
    """A builder was called before normalization parameters existed."""
