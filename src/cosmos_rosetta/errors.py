"""
Rosetta error taxonomy.

Every failure of a construction call is raised as a ``RosettaError`` subclass
carrying a stable code, and is rendered as the protocol's error envelope.
"""

from typing import Any, Dict, List, Optional, Type

from cosmos_rosetta.models import ErrorEnvelope


class RosettaError(Exception):
    """
    Base class of all protocol errors.

    Subclasses fix ``code``, ``message`` and ``retriable``; instances add an
    optional human readable detail and structured details.
    """

    code: int = 0
    message: str = "unknown error"
    retriable: bool = False

    def __init__(
        self,
        detail: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(detail or self.message)
        self.detail = detail
        self.details = details

    def to_envelope(self) -> ErrorEnvelope:
        """Render as the Rosetta error object."""
        return ErrorEnvelope(
            code=self.code,
            message=self.message,
            description=self.detail,
            retriable=self.retriable,
            details=self.details,
        )

    @classmethod
    def catalog_entry(cls) -> ErrorEnvelope:
        """Envelope without instance detail, for listing supported errors."""
        return ErrorEnvelope(code=cls.code, message=cls.message, retriable=cls.retriable)


class UnknownError(RosettaError):
    code = 0
    message = "unknown error"


class InterpretationError(RosettaError):
    """Malformed or absent required fields."""
    code = 1
    message = "error interpreting request data"


class InvalidAddress(RosettaError):
    code = 2
    message = "invalid address"


class InvalidMemo(RosettaError):
    code = 3
    message = "invalid memo"


class MissingGasOption(RosettaError):
    code = 4
    message = "gas option not set"


class InvalidOperation(RosettaError):
    code = 5
    message = "invalid operation"


class InvalidRequest(RosettaError):
    code = 6
    message = "invalid request"


class TransactionBuildError(RosettaError):
    """Raised when transaction construction or encoding fails."""
    code = 7
    message = "unable to build transaction"


class ChainCommunicationError(RosettaError):
    """Wraps any failure of the chain client."""
    code = 8
    message = "error communicating with the node"
    retriable = True


class UnsupportedCurve(RosettaError):
    code = 9
    message = "unsupported curve, expected secp256k1"


class InvalidPublicKey(RosettaError):
    code = 10
    message = "invalid public key"


class EndpointNotImplemented(RosettaError):
    code = 11
    message = "not implemented"


ALL_ERRORS: List[Type[RosettaError]] = [
    UnknownError,
    InterpretationError,
    InvalidAddress,
    InvalidMemo,
    MissingGasOption,
    InvalidOperation,
    InvalidRequest,
    TransactionBuildError,
    ChainCommunicationError,
    UnsupportedCurve,
    InvalidPublicKey,
    EndpointNotImplemented,
]
