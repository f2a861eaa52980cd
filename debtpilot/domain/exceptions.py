"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidLoanInputError(DomainException):
    """Loan figures cannot produce a meaningful schedule (e.g. non-positive tenure)"""

    pass


class UnknownScorerError(DomainException):
    """Requested scoring strategy does not exist"""

    pass
