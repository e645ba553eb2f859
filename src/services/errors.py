INVALID_IMAGE_MESSAGE = "Missing or invalid base64 image string."
IMAGE_TOO_LARGE_MESSAGE = "Image too large."
LOW_QUALITY_MESSAGE = (
    "The image is too unclear to read the ingredients. Please retake the photo."
)
SCAN_FAILED_MESSAGE = "Unable to analyze the image."


class ScanError(Exception):
    status_code = 500
    message = SCAN_FAILED_MESSAGE

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InputValidationError(ScanError):
    status_code = 400
    message = INVALID_IMAGE_MESSAGE


class LowQualityInputError(ScanError):
    status_code = 400
    message = LOW_QUALITY_MESSAGE

    def __init__(self, ratio: float, message: str | None = None):
        self.ratio = ratio
        super().__init__(message)


class CollaboratorError(ScanError):
    """A call to text extraction or an ingredient store failed.

    The public message is always the generic one; the cause is kept for logs.
    """

    status_code = 500

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(SCAN_FAILED_MESSAGE)

    def __str__(self) -> str:
        return self.detail


class TextExtractionError(CollaboratorError):
    pass


class ReferenceStoreError(CollaboratorError):
    pass


class LearnerWriteError(Exception):
    def __init__(self, name: str, cause: Exception):
        self.name = name
        self.cause = cause
        super().__init__(f"Failed to record candidate '{name}': {cause}")
