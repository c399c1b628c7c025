"""Exception hierarchy for Curbmap."""


class CurbMapError(Exception):
    """Base exception for all Curbmap errors."""

    pass


class PartitionError(CurbMapError):
    """Errors related to segment partitions."""

    pass


class InvalidArgumentError(PartitionError):
    """A partition could not be created from the given arguments."""

    def __init__(self, name: str, value: object, reason: str) -> None:
        self.name = name
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {name} {value!r}: {reason}")


class InvalidAdjustmentError(PartitionError):
    """An edit would break length conservation or leave an empty segment."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class IndexOutOfRangeError(PartitionError):
    """An action referenced a segment that does not exist."""

    def __init__(self, index: int, segment_count: int) -> None:
        self.index = index
        self.segment_count = segment_count
        super().__init__(f"Segment index {index} out of range for {segment_count} segments")


class GeometryError(CurbMapError):
    """Errors in geodesic calculations."""

    pass


class ProjectionError(GeometryError):
    """A point-at-distance or sub-path slice could not be resolved."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class BlockfaceError(CurbMapError):
    """Errors related to loading or saving blockface geometry."""

    pass


class BlockfaceLoadError(BlockfaceError):
    """Error loading a blockface file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load blockface '{path}': {reason}")


class BlockfaceFormatError(BlockfaceError):
    """Blockface file is not usable line geometry."""

    def __init__(self, path: str, details: str) -> None:
        self.path = path
        self.details = details
        super().__init__(f"Invalid blockface geometry '{path}': {details}")


class OutputWriteError(BlockfaceError):
    """Error writing projected segments."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write '{path}': {reason}")
