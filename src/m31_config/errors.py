"""
Error Types
===========

Exceptions raised by the configuration codec, the updater and the
transport layer.

Out-of-range enumerated codes are NOT errors: they are decoded as
``unknown(<code>)`` values and reported to the caller.

License: MIT
"""


class M31ConfigError(Exception):
    """Base class for all gateway configuration errors."""


class InvalidAddress(M31ConfigError, ValueError):
    """Address string is not a valid IPv4 address. Never sent to the device."""

    def __init__(self, address, reason: str = "IP address is not valid"):
        self.address = address
        self.reason = reason
        super().__init__(f"{reason}: {address!r}")


class PayloadError(M31ConfigError, ValueError):
    """Register block could not be decoded."""


class ShortPayload(PayloadError):
    """Device returned fewer bytes than the configuration layout requires."""

    def __init__(self, received: int, expected: int):
        self.received = received
        self.expected = expected
        super().__init__(
            f"Configuration payload too short: got {received} bytes, "
            f"expected {expected}"
        )


class MalformedPayload(PayloadError):
    """Structural decoding failed on a length-checked payload."""


class TransportError(M31ConfigError, ConnectionError):
    """Connection, timeout or protocol failure reported by the transport."""


class WriteFailed(M31ConfigError):
    """
    One of the two register writes of a field update failed.

    Attributes:
        field: WritableField being updated
        register_address: Device register whose write failed
        cause: Underlying exception (usually TransportError)
    """

    def __init__(self, field, register_address: int, cause: Exception):
        self.field = field
        self.register_address = register_address
        self.cause = cause
        super().__init__(
            f"Writing {field.label} failed at register {register_address}: {cause}"
        )


class UnsupportedField(M31ConfigError):
    """Field has no write address in the selected firmware layout revision."""

    def __init__(self, field, revision: str):
        self.field = field
        self.revision = revision
        super().__init__(f"Writing {field.label} is not supported by the {revision} layout")
