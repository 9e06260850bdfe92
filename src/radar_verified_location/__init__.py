"""
Radar verified location models for Python

Immutable results of a location verification: the user, the detected
events, a signed JWT and its expiration.
"""

from .models import DictionaryValue, Event, User, VerifiedLocationToken
from .dates import format_timestamp, parse_timestamp
from .errors import VerificationError
from .response import parse_verified_location_response

__version__ = "0.1.0"

__all__ = [
    "DictionaryValue",
    "Event",
    "User",
    "VerifiedLocationToken",
    "VerificationError",
    "format_timestamp",
    "parse_timestamp",
    "parse_verified_location_response",
]
