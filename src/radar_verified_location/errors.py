"""
Exceptions raised when reading verification responses.
"""


class VerificationError(Exception):
    """
    The verification service answered with an error status.

    Attributes:
        status_code: HTTP status code of the response
        message: Error text reported by the service, if any
    """

    def __init__(self, status_code: int, message: str | None = None):
        self.status_code = status_code
        self.message = message
        super().__init__(
            f"Verification failed with status {status_code}: "
            f"{message or 'no error message'}"
        )
