"""Domain layer errors."""

from typing import ClassVar


class DomainError(Exception):
    """Base domain error."""

    # Writes made before the error was raised are kept by the request transaction
    commit_on_raise: ClassVar[bool] = False


class ValidationError(DomainError):
    """Malformed or out-of-range input."""

    pass


class InvalidDateRange(ValidationError):
    """Session dates are not in a valid order."""

    pass


class StateConflictError(DomainError):
    """The target is not in a state that allows the operation."""

    pass


class InvalidStateTransition(StateConflictError):
    """Raised when a status transition is not allowed."""

    def __init__(self, resource: str, resource_id: str, current: str, target: str):
        self.resource = resource
        self.resource_id = resource_id
        self.current = current
        self.target = target
        super().__init__(
            f"Cannot move {resource} {resource_id} from {current} to {target}"
        )


class RegistrarConflict(StateConflictError):
    """Another registrar already owns the student for the session."""

    def __init__(self, student_id: str, session_id: str):
        self.student_id = student_id
        self.session_id = session_id
        super().__init__(
            f"Student {student_id} is assigned to another registrar "
            f"in session {session_id}"
        )


class AlreadyClaimed(StateConflictError):
    """Student is not claimable in the active session."""

    pass


class NoActiveSession(StateConflictError):
    """No academic session is currently active."""

    def __init__(self) -> None:
        super().__init__("No active session")


class DuplicateInvitation(StateConflictError):
    """A pending invitation already exists for the email and user type."""

    pass


class EmailExists(StateConflictError):
    """The email address is already registered with the identity provider."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class UnauthorizedError(DomainError):
    """Caller identity could not be established."""

    pass


class InvalidOrExpiredToken(UnauthorizedError):
    """Invitation token is unknown, used, cancelled or expired."""

    # Keeps the EXPIRED status flip made while detecting expiry
    commit_on_raise = True

    def __init__(self) -> None:
        super().__init__("Invalid or expired invitation token")


class ForbiddenError(DomainError):
    """Raised when an actor attempts to act on a resource they don't own."""

    def __init__(self, resource: str, resource_id: str, actor_id: str):
        self.resource = resource
        self.resource_id = resource_id
        self.actor_id = actor_id
        super().__init__(f"Actor {actor_id} may not modify {resource} {resource_id}")


class ExternalServiceError(DomainError):
    """An external collaborator failed."""

    pass


class IdentityProviderError(ExternalServiceError):
    """Identity provider failure other than an already registered email."""

    pass


class SagaFailure(DomainError):
    """A saga step failed after compensations were attempted.

    Attributes:
        step: Name of the step that failed
        compensations: Outcome of every compensation run, in execution order
    """

    step: ClassVar[str] = "unknown"

    def __init__(self, message: str, compensations=None):
        self.compensations = list(compensations or [])
        super().__init__(message)

    @property
    def rolled_back(self) -> bool:
        """Whether every compensation succeeded."""
        return all(c.succeeded for c in self.compensations)


class RoleAssignmentError(SagaFailure):
    step = "assign_role"


class ProfileCreationError(SagaFailure):
    step = "complete_profile"


class InvitationUpdateError(SagaFailure):
    step = "close_invitation"
