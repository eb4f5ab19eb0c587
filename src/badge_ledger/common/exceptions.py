"""Badge-Ledger exception hierarchy."""


class BadgeError(Exception):
    """Base exception for all registry errors."""

    def __init__(self, message: str = "", code: str = "BADGE_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class NotOwnerError(BadgeError):
    """Raised when the caller lacks the ownership an operation requires."""

    def __init__(self, message: str = "Caller is not the badge owner"):
        super().__init__(message, code="NOT_OWNER")


class BadgeNotFoundError(BadgeError):
    """Raised when a referenced badge has no live record."""

    def __init__(self, message: str = "Badge not found"):
        super().__init__(message, code="NOT_FOUND")


class InvalidURIError(BadgeError):
    """Raised when a metadata URI is empty, too long, or not ASCII."""

    def __init__(self, message: str = "Invalid badge URI"):
        super().__init__(message, code="INVALID_URI")


class AlreadyBurnedError(BadgeError):
    """Raised when an operation targets a burned badge."""

    def __init__(self, message: str = "Badge is already burned"):
        super().__init__(message, code="ALREADY_BURNED")


class BatchTooLargeError(BadgeError):
    """Raised when a batch mint exceeds the configured size limit."""

    def __init__(self, message: str = "Batch exceeds size limit"):
        super().__init__(message, code="BATCH_TOO_LARGE")


class URITakenError(BadgeError):
    """Raised when a URI is already attached to another live badge."""

    def __init__(self, message: str = "URI already assigned to another badge"):
        super().__init__(message, code="URI_TAKEN")
