"""
Data models for verified location results.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Mapping, Protocol

from .dates import format_timestamp, parse_timestamp

logger = logging.getLogger(__name__)


class DictionaryValue(Protocol):
    """Anything that can render itself as a plain dictionary."""

    def to_dict(self) -> dict[str, Any]: ...


def _dictionary_or_none(value: DictionaryValue | None) -> dict[str, Any] | None:
    return value.to_dict() if value is not None else None


def _timestamp_or_none(value: datetime | None) -> str | None:
    return format_timestamp(value) if value is not None else None


def _read(data: Mapping[str, Any], key: str, expected: type | tuple[type, ...]) -> Any:
    """Return data[key] if it has the expected type, otherwise None."""
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, expected):
        return value
    logger.debug(
        "Ignoring field %r: expected %s, got %s",
        key,
        expected,
        type(value).__name__,
    )
    return None


def _read_timestamp(data: Mapping[str, Any], key: str) -> datetime | None:
    text = _read(data, key, str)
    if text is None:
        return None
    parsed = parse_timestamp(text)
    if parsed is None:
        logger.debug("Ignoring field %r: unparseable timestamp %r", key, text)
    return parsed


def _read_metadata(data: Mapping[str, Any]) -> Mapping[str, Any] | None:
    return _read(data, "metadata", Mapping)


def _freeze_metadata(model: Any) -> None:
    # Read-only copy, so later changes to the caller's dict don't show through
    if model.metadata is not None:
        object.__setattr__(model, "metadata", MappingProxyType(dict(model.metadata)))


def _require_mapping(data: Any, name: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"{name} data must be a mapping, got {type(data).__name__}")
    return data


@dataclass(frozen=True)
class User:
    """
    The subject of a verified location.

    Attributes:
        id: Radar identifier of the user (``_id``)
        user_id: Stable identifier assigned by the app (``userId``)
        device_id: Device identifier (``deviceId``)
        description: Optional display description
        metadata: Custom key/value data attached to the user
    """
    id: str | None = None
    user_id: str | None = None
    device_id: str | None = None
    description: str | None = None
    metadata: Mapping[str, Any] | None = field(default=None, hash=False)

    def __post_init__(self) -> None:
        _freeze_metadata(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "_id": self.id,
            "userId": self.user_id,
            "deviceId": self.device_id,
            "description": self.description,
            "metadata": dict(self.metadata) if self.metadata is not None else None,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> User:
        data = _require_mapping(data, "User")
        return cls(
            id=_read(data, "_id", str),
            user_id=_read(data, "userId", str),
            device_id=_read(data, "deviceId", str),
            description=_read(data, "description", str),
            metadata=_read_metadata(data),
        )


@dataclass(frozen=True)
class Event:
    """
    A domain occurrence detected for the user, e.g. entering a geofence.

    Attributes:
        id: Radar identifier of the event (``_id``)
        type: Event type, e.g. "user.entered_geofence"
        created_at: When the event was recorded by the server
        actual_created_at: When the event actually happened on the device
        live: Whether the event was generated with a live API key
        metadata: Custom key/value data attached to the event
    """
    id: str | None = None
    type: str | None = None
    created_at: datetime | None = None
    actual_created_at: datetime | None = None
    live: bool | None = None
    metadata: Mapping[str, Any] | None = field(default=None, hash=False)

    def __post_init__(self) -> None:
        _freeze_metadata(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "_id": self.id,
            "type": self.type,
            "createdAt": _timestamp_or_none(self.created_at),
            "actualCreatedAt": _timestamp_or_none(self.actual_created_at),
            "live": self.live,
            "metadata": dict(self.metadata) if self.metadata is not None else None,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Event:
        data = _require_mapping(data, "Event")
        return cls(
            id=_read(data, "_id", str),
            type=_read(data, "type", str),
            created_at=_read_timestamp(data, "createdAt"),
            actual_created_at=_read_timestamp(data, "actualCreatedAt"),
            live=_read(data, "live", bool),
            metadata=_read_metadata(data),
        )


@dataclass(frozen=True)
class VerifiedLocationToken:
    """
    A user's verified location.

    Instances are immutable and may be shared freely between threads.
    Every field is independently optional.

    Attributes:
        user: The user whose location was verified
        events: Events detected during verification, in detection order
        token: Signed JWT containing the user and events. Verify it
            server-side with your secret key; it is never checked here.
        expires_at: When the token expires
    """
    user: User | None = None
    events: tuple[Event, ...] | None = None
    token: str | None = None
    expires_at: datetime | None = None

    def __post_init__(self) -> None:
        # Store events as a tuple so the instance can't change through the caller's list
        if self.events is not None and not isinstance(self.events, tuple):
            object.__setattr__(self, "events", tuple(self.events))

    def to_dict(self) -> dict[str, Any]:
        """
        Dictionary representation, ready for JSON encoding or logging.

        Always contains the keys "user", "events", "token" and "expiresAt";
        absent fields map to None.
        """
        events: list[dict[str, Any]] | None = None
        if self.events is not None:
            events = [event.to_dict() for event in self.events]

        return {
            "user": _dictionary_or_none(self.user),
            "events": events,
            "token": self.token,
            "expiresAt": _timestamp_or_none(self.expires_at),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> VerifiedLocationToken:
        """
        Build a token from a decoded verification response.

        Fields are read independently: a missing or malformed field becomes
        None without affecting the others.

        Args:
            data: Decoded JSON object, as returned by the verification service

        Returns:
            VerifiedLocationToken

        Raises:
            ValueError: If data is not a mapping
        """
        data = _require_mapping(data, "VerifiedLocationToken")

        user_data = _read(data, "user", Mapping)
        user = User.from_dict(user_data) if user_data is not None else None

        events: tuple[Event, ...] | None = None
        events_data = _read(data, "events", (list, tuple))
        if events_data is not None:
            parsed: list[Event] = []
            for index, item in enumerate(events_data):
                if not isinstance(item, Mapping):
                    logger.debug(
                        "Skipping event %d: expected a mapping, got %s",
                        index,
                        type(item).__name__,
                    )
                    continue
                parsed.append(Event.from_dict(item))
            events = tuple(parsed)

        return cls(
            user=user,
            events=events,
            token=_read(data, "token", str),
            expires_at=_read_timestamp(data, "expiresAt"),
        )
