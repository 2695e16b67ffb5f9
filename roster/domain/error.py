"""Domain layer errors.

Repositories raise these for every expected failure. Mapping them to
transport status codes is the interface layer's job.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ConflictError(DomainError):
    """Raised when a write would break a uniqueness rule."""

    def __init__(self, resource: str, field: str, value: str):
        self.resource = resource
        self.field = field
        self.value = value
        super().__init__(f"{resource} with {field} {value} already exists")


class StorageUnavailableError(DomainError):
    """Raised when the backing store cannot service a request.

    Distinct from an empty or absent result: the store itself could not
    be reached or locked.
    """

    def __init__(self, message: str = "Storage unavailable"):
        super().__init__(message)
