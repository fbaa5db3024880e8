"""
Custom exception hierarchy for geohash-index.

All custom exceptions inherit from GeohashError for easy catching.
Every error is raised synchronously for a bad input and recurs for the
same input, so none of them is worth retrying.
"""


class GeohashError(Exception):
    """Base exception for all geohash-index errors."""
    pass


class CodecError(GeohashError):
    """Errors raised while encoding or decoding hashes.

    Attributes:
        value: The offending input value, if any
    """

    def __init__(self, message: str, value=None):
        super().__init__(message)
        self.value = value

    def __str__(self):
        base = super().__str__()
        if self.value is not None:
            return f"{base} (value={self.value!r})"
        return base


class InvalidLatitudeError(CodecError):
    """Latitude outside [-90, 90] (or NaN).

    Example:
        >>> raise InvalidLatitudeError("latitude must be between -90 and 90 inclusive", value=91.0)
    """
    pass


class InvalidLongitudeError(CodecError):
    """Longitude that cannot be normalised (infinite or NaN)."""
    pass


class InvalidPrecisionError(CodecError):
    """Requested hash length is outside the supported range."""
    pass


class InvalidLengthError(InvalidPrecisionError):
    """Length outside [1, 12] where the packed 64-bit layout is assumed,
    or a non-positive padding length for base 32 output."""
    pass


class InvalidAlphabetCharacterError(CodecError):
    """Character (or index) outside the 32 symbol geohash alphabet."""
    pass


class InvalidHashError(CodecError):
    """Empty or malformed hash string."""
    pass


class AdjacencyError(GeohashError):
    """Errors raised while resolving neighbouring hashes."""
    pass


class UndefinedAdjacencyError(AdjacencyError):
    """Adjacency requested for the zero length hash covering the whole world."""
    pass


class CoverageError(GeohashError):
    """Errors raised while planning bounding box coverage."""
    pass


class InvalidBoundingBoxError(CoverageError):
    """Bounding box corners inverted after longitude normalisation.

    Attributes:
        corners: (top_left_lat, top_left_lon, bottom_right_lat, bottom_right_lon)
    """

    def __init__(self, message: str, corners: tuple = None):
        super().__init__(message)
        self.corners = corners

    def __str__(self):
        base = super().__str__()
        if self.corners:
            return f"{base} (corners={self.corners})"
        return base


class ConfigurationError(GeohashError):
    """Configuration-related errors.

    Raised when configuration loading or validation fails.

    Example:
        >>> raise ConfigurationError("Invalid config: 'coverage' must be a mapping")
    """
    pass


class FrameValidationError(GeohashError):
    """Tabular input validation errors.

    Raised when a DataFrame handed to the batch helpers fails validation.

    Attributes:
        invalid_rows: Number of rows that failed validation
        details: Dictionary with validation error details
    """

    def __init__(self, message: str, invalid_rows: int = 0, details: dict = None):
        super().__init__(message)
        self.invalid_rows = invalid_rows
        self.details = details or {}

    def __str__(self):
        base = super().__str__()
        if self.invalid_rows > 0:
            return f"{base} (invalid_rows={self.invalid_rows})"
        return base


class FrameLoadError(GeohashError):
    """Tabular input loading errors.

    Example:
        >>> raise FrameLoadError("Failed to load points: file not found")
    """
    pass
