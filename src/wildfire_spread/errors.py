"""Errors raised while validating a simulation before it runs."""


class SpreadError(ValueError):
    """Base class for invalid simulation inputs."""


class LandscapeError(SpreadError):
    """Landscape layers are missing, not 2D or of mismatched shape."""


class InvalidIgnitionCell(SpreadError):
    """An ignition coordinate is outside the grid or on a non-burnable cell."""

    def __init__(self, cell, reason: str):
        self.cell = cell
        self.reason = reason
        super().__init__(f"Invalid ignition cell {cell}: {reason}")


class InvalidVegetationIndex(SpreadError):
    """A vegetation class has no matching intercept."""

    def __init__(self, vegetation, n_intercepts: int):
        self.vegetation = vegetation
        self.n_intercepts = n_intercepts
        super().__init__(
            f"Vegetation class {vegetation} has no intercept "
            f"(only {n_intercepts} intercepts given)"
        )


class MalformedCoefficients(SpreadError):
    """Coefficient vectors are empty, not finite or missing entries."""
