"""Custom exceptions for the clinic dashboard."""


class ApiConnectionError(Exception):
    """Raised when the clinic API cannot be reached (DNS, TLS, refused)."""

    def __init__(self, method: str, path: str, cause: Exception | None = None):
        self.method = method
        self.path = path
        self.cause = cause
        super().__init__(f"Request {method} {path} failed: {cause}")


class ApiRequestError(Exception):
    """Raised when the clinic API answers with a non-success status."""

    def __init__(self, method: str, path: str, status_code: int, body: str):
        self.method = method
        self.path = path
        self.status_code = status_code
        self.body = body
        super().__init__(f"API Error: {status_code} - {body}")


class MalformedResponseError(Exception):
    """Raised when a response body cannot be decoded into the expected shape."""

    def __init__(self, path: str, reason: str, cause: Exception | None = None):
        self.path = path
        self.reason = reason
        self.cause = cause
        super().__init__(f"Malformed response from '{path}': {reason}")


class FormValidationError(Exception):
    """Raised when a dialog draft fails client-side validation."""

    def __init__(self, message: str, field: str | None = None):
        self.message = message
        self.field = field
        super().__init__(message)


class InvalidAttachmentError(FormValidationError):
    """Raised when an attachment reference is neither a URL nor a file path."""

    def __init__(self, value: str, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(f"Archivo no válido '{value}': {reason}", field="archivos")


# Transport, status and body failures: what views and dialogs surface to the user
API_ERRORS = (ApiConnectionError, ApiRequestError, MalformedResponseError)
