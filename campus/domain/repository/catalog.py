"""Program and course repository interfaces."""

from abc import ABC, abstractmethod

from campus.domain.model import Course, Program
from campus.domain.value import CourseId, ProgramId


class ProgramRepository(ABC):
    """Repository for Program reference data."""

    @abstractmethod
    async def find_by_id(self, program_id: ProgramId) -> Program | None:
        pass

    @abstractmethod
    async def save(self, program: Program) -> Program:
        pass


class CourseRepository(ABC):
    """Repository for Course reference data."""

    @abstractmethod
    async def find_by_id(self, course_id: CourseId) -> Course | None:
        pass

    @abstractmethod
    async def save(self, course: Course) -> Course:
        pass
