"""Reference entities: programs and courses."""

from campus.domain.model.common import DomainModel
from campus.domain.value import CourseId, ProgramId


class Program(DomainModel):
    """Degree program a student is admitted into."""

    id: ProgramId
    name: str
    program_type: str  # e.g. 'UNDERGRADUATE', 'POSTGRADUATE'


class Course(DomainModel):
    """Course that can be enrolled in during a session."""

    id: CourseId
    code: str
    title: str
    credits: int
