"""Payload models that turn collaborator records into validated ``SubjectResult`` values.

Field names are accepted in snake_case or camelCase (``marksObtained``,
``isPrincipal``) since marks-entry forms and report handlers send the latter.
"""

from typing import Any, Iterable, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from schoolresults.config.settings import settings
from schoolresults.core.errors import ValidationError
from schoolresults.core.models import EducationLevel, SubjectResult


class SubjectResultPayload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    subject_code: str = Field(min_length=1)
    marks_obtained: Optional[float] = Field(default=None, allow_inf_nan=False)
    max_marks: float = Field(default_factory=lambda: settings.default_max_marks, gt=0, allow_inf_nan=False)
    is_principal: bool = False
    level: Optional[EducationLevel] = None
    subject_name: str = ""

    @model_validator(mode="after")
    def _marks_in_range(self) -> "SubjectResultPayload":
        if self.marks_obtained is not None and not 0 <= self.marks_obtained <= self.max_marks:
            raise ValueError(f"marks_obtained {self.marks_obtained} out of range 0-{self.max_marks}")
        return self

    def to_result(self) -> SubjectResult:
        return SubjectResult(
            subject_code=self.subject_code,
            marks_obtained=self.marks_obtained,
            max_marks=self.max_marks,
            is_principal=self.is_principal,
            level=self.level,
            subject_name=self.subject_name,
        )


class StudentResultsPayload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    student_id: str = Field(min_length=1)
    results: List[SubjectResultPayload] = Field(default_factory=list)


def parse_subject_result(payload: Any) -> SubjectResult:
    if isinstance(payload, SubjectResult):
        return payload
    try:
        return SubjectResultPayload.model_validate(payload).to_result()
    except PydanticValidationError as exc:
        raise ValidationError(f"Invalid subject result: {exc}") from exc


def parse_subject_results(payloads: Iterable[Any]) -> List[SubjectResult]:
    return [parse_subject_result(payload) for payload in payloads]


def parse_student_results(payload: Mapping[str, Any]) -> StudentResultsPayload:
    try:
        return StudentResultsPayload.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError(f"Invalid student results: {exc}") from exc
