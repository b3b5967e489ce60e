"""Domain layer errors.

Every error carries a stable ``code`` so callers (and the UI behind them)
can tell outcomes apart without parsing messages.
"""


class DomainError(Exception):
    """Base domain error."""

    code = "domain_error"


class NotAuthenticatedError(DomainError):
    """Raised when there is no valid caller identity."""

    code = "not_authenticated"

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class NotAuthorizedError(DomainError):
    """Raised when a caller does not own the resource they are acting on."""

    code = "unauthorized"

    def __init__(self, resource: str, resource_id: str, account_id: str):
        super().__init__(
            f"Account {account_id} is not authorized to modify {resource} {resource_id}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    code = "not_found"

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ExpiredError(DomainError):
    """Raised when a merge token is past its TTL."""

    code = "expired"

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} has expired: {identifier}")


class SameAccountError(DomainError):
    """Raised when both sides of a merge handshake are the same account."""

    code = "same_account"

    def __init__(self, account_id: str):
        self.account_id = account_id
        super().__init__("This login is already linked to your account")


class AlreadyOwnedError(DomainError):
    """Raised when a merge candidate identity already belongs to the caller."""

    code = "already_owned"

    def __init__(self, provider: str, provider_user_id: str):
        super().__init__(
            f"Identity {provider}:{provider_user_id} already belongs to you"
        )


class InvalidMergeError(DomainError):
    """Raised when a merge is asked to fold an account into itself."""

    code = "invalid_merge"

    def __init__(self, message: str = "Cannot merge an account with itself"):
        super().__init__(message)


class NoProfileError(DomainError):
    """Raised when a merge side has no profile to merge."""

    code = "no_profile"

    def __init__(self, side: str, account_id: str):
        self.side = side
        self.account_id = account_id
        super().__init__(f"{side.capitalize()} account {account_id} has no profile")


class AlreadyMergedError(DomainError):
    """Raised when both accounts already share one profile."""

    code = "already_merged"

    def __init__(self, profile_id: str):
        self.profile_id = profile_id
        super().__init__(f"Accounts already share profile {profile_id}")


class ConflictError(DomainError):
    """Raised when a write would violate a uniqueness constraint."""

    code = "conflict"

    def __init__(self, message: str):
        super().__init__(message)
