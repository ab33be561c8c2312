"""In-memory program and course repositories for testing."""

from typing import Optional

from campus.domain.model import Course, Program
from campus.domain.repository import CourseRepository, ProgramRepository
from campus.domain.value import CourseId, ProgramId


class InMemoryProgramRepository(ProgramRepository):
    def __init__(self) -> None:
        self._programs: dict[ProgramId, Program] = {}

    async def find_by_id(self, program_id: ProgramId) -> Optional[Program]:
        return self._programs.get(program_id)

    async def save(self, program: Program) -> Program:
        self._programs[program.id] = program
        return program


class InMemoryCourseRepository(CourseRepository):
    def __init__(self) -> None:
        self._courses: dict[CourseId, Course] = {}

    async def find_by_id(self, course_id: CourseId) -> Optional[Course]:
        return self._courses.get(course_id)

    async def save(self, course: Course) -> Course:
        self._courses[course.id] = course
        return course
