"""Exception taxonomy shared by services, agents and API routes."""


class DriveConsultError(Exception):
    """Base class for all application errors.

    ``public_message`` is what an API client sees; the exception's own
    message may carry internal detail and is only logged.
    """

    status_code = 500
    public_message = "Internal server error."

    def __init__(self, message: str = "", public_message: str | None = None):
        super().__init__(message or self.public_message)
        if public_message is not None:
            self.public_message = public_message


class ClientInputError(DriveConsultError):
    """A request is missing required fields."""

    status_code = 400
    public_message = "folderId and question are required."


class BackendUnavailable(DriveConsultError):
    """The storage backend could not be reached or rejected the call."""

    public_message = "Failed to fetch files."


class ExtractionError(DriveConsultError):
    """A single document could not be fetched or parsed."""

    public_message = "Could not read file content."


class UnsupportedFileType(ExtractionError):
    """No extractor is registered for a MIME type."""


class ModelError(DriveConsultError):
    """The generative model returned no usable candidate."""

    public_message = "Failed to consult the model."
