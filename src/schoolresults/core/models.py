from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class EducationLevel(str, Enum):
    O_LEVEL = "O_LEVEL"
    A_LEVEL = "A_LEVEL"


@dataclass(frozen=True)
class SubjectResult:
    subject_code: str
    marks_obtained: float | None
    max_marks: float = 100
    is_principal: bool = False
    level: EducationLevel | None = None
    subject_name: str = ""


@dataclass(frozen=True)
class GradedSubject:
    result: SubjectResult
    grade: str | None
    points: int | None
    remarks: str

    @property
    def subject_code(self) -> str:
        return self.result.subject_code

    @property
    def marks_obtained(self) -> float | None:
        return self.result.marks_obtained

    @property
    def is_principal(self) -> bool:
        return self.result.is_principal


@dataclass(frozen=True)
class StudentAggregate:
    student_id: str
    level: EducationLevel
    subjects: tuple[GradedSubject, ...]
    total_marks: float
    average_marks: float | None
    total_points: int
    graded_count: int
    best_principal_points: int | None = None
    best_principal_subjects: tuple[str, ...] = ()
    # O-Level report total over the seven best graded subjects
    best_seven_points: int | None = None
    best_seven_subjects: tuple[str, ...] = ()
    division: str = "N/A"
    rank: int | None = None

    @property
    def average_points(self) -> float | None:
        if self.graded_count == 0:
            return None
        return self.total_points / self.graded_count
