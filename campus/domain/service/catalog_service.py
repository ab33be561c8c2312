"""Program and course lookups."""

from campus.domain.error import NotFoundError
from campus.domain.model import Course, Program
from campus.domain.repository import CourseRepository, ProgramRepository
from campus.domain.value import CourseId, ProgramId

from .base import Service


class CatalogService(Service):
    """Read access to programs and courses."""

    def __init__(
        self, program_repository: ProgramRepository, course_repository: CourseRepository
    ) -> None:
        self.program_repository = program_repository
        self.course_repository = course_repository

    async def get_program(self, program_id: ProgramId) -> Program:
        program = await self.program_repository.find_by_id(program_id)
        if not program:
            raise NotFoundError("Program", str(program_id))
        return program

    async def get_course(self, course_id: CourseId) -> Course:
        course = await self.course_repository.find_by_id(course_id)
        if not course:
            raise NotFoundError("Course", str(course_id))
        return course
