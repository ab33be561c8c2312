"""Enrollment use cases."""

from .approve_enrollment import ApproveEnrollmentRequest, ApproveEnrollmentUseCase
from .cancel_enrollment import CancelEnrollmentRequest, CancelEnrollmentUseCase
from .enrollment_response import EnrollmentResponse
from .get_enrollment import GetEnrollmentRequest, GetEnrollmentUseCase
from .reject_enrollment import RejectEnrollmentRequest, RejectEnrollmentUseCase
from .request_enrollment import RequestEnrollmentRequest, RequestEnrollmentUseCase

__all__ = [
    "ApproveEnrollmentRequest",
    "ApproveEnrollmentUseCase",
    "CancelEnrollmentRequest",
    "CancelEnrollmentUseCase",
    "EnrollmentResponse",
    "GetEnrollmentRequest",
    "GetEnrollmentUseCase",
    "RejectEnrollmentRequest",
    "RejectEnrollmentUseCase",
    "RequestEnrollmentRequest",
    "RequestEnrollmentUseCase",
]
