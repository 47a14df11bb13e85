"""Request and response models.

JSON field names are camelCase (``courseId``, ``createdAt``); request bodies
also accept the snake_case attribute names.
"""

from datetime import datetime

from pydantic import BaseModel, EmailStr, field_validator
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


def _normalize_email(value):
    if isinstance(value, str):
        normalized = value.strip().lower()
        return normalized or None
    return value


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------

class RegisterRequest(ApiModel):
    name: str | None = None
    email: EmailStr | None = None
    password: str | None = None

    @field_validator('name', mode='before')
    @classmethod
    def strip_name(cls, value):
        if isinstance(value, str):
            return value.strip() or None
        return value

    @field_validator('email', mode='before')
    @classmethod
    def normalize_email(cls, value):
        return _normalize_email(value)


class LoginRequest(ApiModel):
    email: str | None = None
    password: str | None = None

    @field_validator('email', mode='before')
    @classmethod
    def normalize_email(cls, value):
        return _normalize_email(value)


class UserPublic(ApiModel):
    id: int
    name: str
    email: str


class TokenResponse(ApiModel):
    token: str


class CurrentUserResponse(ApiModel):
    id: int
    email: str


# ---------------------------------------------------------------------------
# Teachers
# ---------------------------------------------------------------------------

class TeacherCreate(ApiModel):
    name: str
    department: str | None = None


class TeacherUpdate(ApiModel):
    name: str | None = None
    department: str | None = None


class TeacherRead(ApiModel):
    id: int
    name: str
    department: str | None = None
    created_at: datetime
    updated_at: datetime


# ---------------------------------------------------------------------------
# Courses
# ---------------------------------------------------------------------------

class CourseCreate(ApiModel):
    title: str
    description: str | None = None
    teacher_id: int | None = None


class CourseUpdate(ApiModel):
    title: str | None = None
    description: str | None = None
    teacher_id: int | None = None


class CourseRead(ApiModel):
    id: int
    title: str
    description: str | None = None
    teacher_id: int | None = None
    created_at: datetime
    updated_at: datetime


# ---------------------------------------------------------------------------
# Students
# ---------------------------------------------------------------------------

class StudentCreate(ApiModel):
    name: str
    email: EmailStr
    course_id: int | None = None


class StudentUpdate(ApiModel):
    name: str | None = None
    email: EmailStr | None = None
    course_id: int | None = None


class StudentRead(ApiModel):
    id: int
    name: str
    email: str
    course_id: int | None = None
    created_at: datetime
    updated_at: datetime


class DeletedResponse(BaseModel):
    message: str


def dump_entity(row, schema: type[ApiModel], embedded: dict[str, type[ApiModel]] | None = None) -> dict:
    """Serialize ``row`` and embed the loaded relations named in ``embedded``.

    ``embedded`` maps a relationship attribute (``course``, ``students``) to
    the schema of the related rows.
    """
    data = schema.model_validate(row).model_dump(mode='json', by_alias=True)
    for attribute, related_schema in (embedded or {}).items():
        value = getattr(row, attribute)
        if value is None:
            data[attribute] = None
        elif isinstance(value, list):
            data[attribute] = [
                related_schema.model_validate(item).model_dump(mode='json', by_alias=True) for item in value
            ]
        else:
            data[attribute] = related_schema.model_validate(value).model_dump(mode='json', by_alias=True)
    return data
