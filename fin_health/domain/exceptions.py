"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class TransactionSourceError(DomainException):
    """Transaction storage API returned an error, is unavailable or sent malformed data"""

    pass


class InvalidMonthKeyError(DomainException, ValueError):
    """Month key is not a valid YYYY-MM string"""

    pass
