"""Student use cases."""

from .claim_student import ClaimStudentRequest, ClaimStudentUseCase

__all__ = ["ClaimStudentRequest", "ClaimStudentUseCase"]
