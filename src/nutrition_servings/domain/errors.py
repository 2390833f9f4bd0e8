"""Errors raised while converting units and resolving serving sizes."""


class UnitConversionError(ValueError):
    """Raised when a quantity is converted across dimensions or to an unknown unit."""


class ServingResolutionError(Exception):
    """Base error for a serving size that cannot be resolved against a food."""


class UnsupportedDimensionError(ServingResolutionError):
    """The food declares no reference value for the requested dimension."""

    def __init__(self, dimension: str, subject: str, missing: str) -> None:
        super().__init__(
            f"Cannot calculate serving by {dimension}: "
            f"{subject} has no {missing} defined"
        )
        self.dimension = dimension
        self.subject = subject


class UnknownCustomSizeError(ServingResolutionError):
    """The requested custom size is not defined on the food."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown custom size: {name}")
        self.name = name


class UnknownServingSizeError(ServingResolutionError):
    """The requested serving size is not one of the known variants."""

    def __init__(self, kind: object) -> None:
        super().__init__(f"Unknown serving size type: {kind}")
        self.kind = kind


class CyclicReferenceError(ServingResolutionError):
    """A custom size or nested group refers back to itself."""
