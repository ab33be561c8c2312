"""Domain model entities for the enrollment back office."""

from campus.domain.model.academic_session import AcademicSession
from campus.domain.model.catalog import Course, Program
from campus.domain.model.enrollment import Enrollment
from campus.domain.model.invitation import Invitation
from campus.domain.model.registrar import Registrar
from campus.domain.model.registrar_assignment import RegistrarAssignment
from campus.domain.model.student import Student

__all__ = [
    "AcademicSession",
    "Course",
    "Enrollment",
    "Invitation",
    "Program",
    "Registrar",
    "RegistrarAssignment",
    "Student",
]
