"""Domain layer errors.

All errors are recoverable: they describe why a request was refused and
leave stored state untouched.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Input violates a stated constraint (empty text, out-of-range intensity, ...)."""

    pass


class InvalidTransitionError(ValidationError):
    """Raised when a moderation or visibility change is not allowed from the current state."""

    def __init__(self, resource: str, resource_id: str, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(
            f"Cannot move {resource} {resource_id} from {current} to {target}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ContentDeletedError(NotFoundError):
    """Raised when attempting to modify deleted content."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(resource, identifier)
        self.args = (f"{resource} {identifier} has been deleted",)


class ForbiddenError(DomainError):
    """Raised when a user lacks ownership or authorization for a mutation."""

    def __init__(self, action: str, resource: str, resource_id: str, user_id: str):
        self.action = action
        self.resource = resource
        self.resource_id = resource_id
        self.user_id = user_id
        super().__init__(
            f"User {user_id} is not authorized to {action} {resource} {resource_id}"
        )


class ConflictError(DomainError):
    """Raised when a uniqueness constraint rejects a write."""

    def __init__(self, resource: str, detail: str):
        self.resource = resource
        super().__init__(f"{resource} conflict: {detail}")
