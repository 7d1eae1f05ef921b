"""Result types returned by the registration and redemption services.

Each service call returns either a ``Success`` or a ``Failure``. Expected
failures are never raised to the caller; the API layer maps
``Failure.kind`` to a transport status code.
"""

from dataclasses import dataclass, field
from enum import Enum


class ErrorCategory(str, Enum):
    VALIDATION = 'ValidationError'
    NOT_FOUND = 'NotFoundError'
    CONFLICT = 'ConflictError'
    CAPACITY = 'CapacityError'
    RATE_LIMIT = 'RateLimitError'
    INTERNAL = 'InternalError'


class ErrorKind(str, Enum):
    BAD_REQUEST = 'BadRequest'
    STUDENT_NOT_FOUND = 'StudentNotFound'
    EVENT_NOT_FOUND = 'EventNotFound'
    INVALID_TOKEN = 'InvalidToken'
    VOLUNTEER_NOT_FOUND = 'VolunteerNotFound'
    WRONG_EVENT_SCOPE = 'WrongEventScope'
    ALREADY_SERVED = 'AlreadyServed'
    CANCELLED = 'Cancelled'
    ALREADY_REDEEMED = 'AlreadyRedeemed'
    NO_SLOTS_AVAILABLE = 'NoSlotsAvailable'
    TOO_MANY_REQUESTS = 'TooManyRequests'
    INTERNAL_ERROR = 'InternalError'

    @property
    def category(self):
        return _CATEGORIES[self]


_CATEGORIES = {
    ErrorKind.BAD_REQUEST: ErrorCategory.VALIDATION,
    ErrorKind.STUDENT_NOT_FOUND: ErrorCategory.NOT_FOUND,
    ErrorKind.EVENT_NOT_FOUND: ErrorCategory.NOT_FOUND,
    ErrorKind.INVALID_TOKEN: ErrorCategory.NOT_FOUND,
    ErrorKind.VOLUNTEER_NOT_FOUND: ErrorCategory.NOT_FOUND,
    ErrorKind.WRONG_EVENT_SCOPE: ErrorCategory.CONFLICT,
    ErrorKind.ALREADY_SERVED: ErrorCategory.CONFLICT,
    ErrorKind.CANCELLED: ErrorCategory.CONFLICT,
    ErrorKind.ALREADY_REDEEMED: ErrorCategory.CONFLICT,
    ErrorKind.NO_SLOTS_AVAILABLE: ErrorCategory.CAPACITY,
    ErrorKind.TOO_MANY_REQUESTS: ErrorCategory.RATE_LIMIT,
    ErrorKind.INTERNAL_ERROR: ErrorCategory.INTERNAL,
}


@dataclass(frozen=True)
class Success:
    payload: dict
    created: bool = False

    ok = True


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    message: str
    context: dict = field(default_factory=dict)

    ok = False

    def as_dict(self):
        body = {'error': self.kind.value, 'detail': self.message}
        body.update(self.context)
        return body


class Rejected(Exception):
    """Raised inside a transaction to roll it back; carries the failure to report."""

    def __init__(self, failure):
        super().__init__(failure.message)
        self.failure = failure
