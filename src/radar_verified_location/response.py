"""
Reading verified location results out of verification service responses.
"""

import logging

import httpx

from .errors import VerificationError
from .models import VerifiedLocationToken

logger = logging.getLogger(__name__)


def parse_verified_location_response(response: httpx.Response) -> VerifiedLocationToken:
    """
    Parse a verification service response into a VerifiedLocationToken.

    The response must already have been received; no request is made here.

    Args:
        response: Response from the verification endpoint

    Returns:
        VerifiedLocationToken built from the response body

    Raises:
        ValueError: If the body is not a JSON object
        VerificationError: If the service answered with an error status

    Example:
        >>> response = httpx.Response(200, json={"token": "eyJ..."})
        >>> parse_verified_location_response(response).token
        'eyJ...'
    """
    try:
        data = response.json()
    except ValueError as e:
        raise ValueError(
            f"Invalid verification response: {response.status_code}"
        ) from e

    if not isinstance(data, dict):
        raise ValueError(
            f"Invalid verification response: expected a JSON object, "
            f"got {type(data).__name__}"
        )

    if response.status_code >= 400:
        message = data.get("error") or data.get("message")
        if not isinstance(message, str):
            message = None
        logger.debug(
            "Verification service returned %d: %s",
            response.status_code,
            message,
        )
        raise VerificationError(response.status_code, message)

    return VerifiedLocationToken.from_dict(data)
