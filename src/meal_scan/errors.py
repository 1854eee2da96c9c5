"""Error types surfaced to callers."""


class MealScanError(RuntimeError):
    """Base class for user-facing meal scan failures."""


class EmptyAIResponseError(MealScanError):
    """Raised when the model returns no text."""

    def __init__(self, message: str = "AI returned an empty response") -> None:
        super().__init__(message)


class AIResponseParseError(MealScanError):
    """Raised when the model output cannot be decoded as a JSON object."""

    def __init__(self, message: str = "AI response could not be parsed") -> None:
        super().__init__(message)


class AIConnectionError(MealScanError):
    """Raised when the model service call itself fails."""

    def __init__(self, message: str = "AI connection failed") -> None:
        super().__init__(message)


class UnauthenticatedError(MealScanError):
    """Raised when no authenticated user can be resolved."""

    def __init__(self, message: str = "Not signed in") -> None:
        super().__init__(message)


class ImageUploadError(MealScanError):
    """Raised when an image cannot be stored."""

    def __init__(self, message: str = "Image upload failed") -> None:
        super().__init__(message)


class StoreWriteError(MealScanError):
    """Raised when an insert returns no row to read the new id from."""

    def __init__(self, message: str = "Database write returned no rows") -> None:
        super().__init__(message)
