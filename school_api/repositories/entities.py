from sqlalchemy.orm import selectinload

from school_api.core.errors import InvalidReference, MissingField, NotFound
from school_api.models.course import Course
from school_api.models.student import Student
from school_api.models.teacher import Teacher
from school_api.query_options import QueryOptions
from school_api.repositories.base import Repository


class EntityRepository(Repository):
    """CRUD over one table, configured by the subclass attributes below."""

    model = None
    label = "Entity"
    # populate name -> relationship attribute on the model
    relations: dict[str, str] = {}
    # foreign key column -> referenced model
    references: dict[str, type] = {}
    # columns that may not be cleared by an update
    required_fields: tuple[str, ...] = ()

    @classmethod
    def relation_names(cls) -> tuple[str, ...]:
        return tuple(cls.relations)

    def _loaders(self, includes):
        return [selectinload(getattr(self.model, self.relations[name])) for name in includes]

    def _check_references(self, data: dict) -> None:
        for column, referenced in self.references.items():
            value = data.get(column)
            if value is None:
                continue
            if self.db.get(referenced, value) is None:
                raise InvalidReference(f"{referenced.__name__} {value} does not exist")

    def _check_required(self, data: dict) -> None:
        for field in self.required_fields:
            if field in data and data[field] is None:
                raise MissingField(f"{field} cannot be empty")

    def list(self, options: QueryOptions) -> tuple[int, list]:
        created_at = self.model.created_at
        model_id = self.model.id
        order = (created_at.desc(), model_id.desc()) if options.descending else (created_at.asc(), model_id.asc())

        with self.storage_errors(f"list {self.label.lower()} rows"):
            total = self.db.query(self.model).count()
            rows = (
                self.db.query(self.model)
                .options(*self._loaders(options.includes))
                .order_by(*order)
                .offset(options.offset)
                .limit(options.limit)
                .all()
            )
        return total, rows

    def get(self, entity_id: int, includes=()):
        with self.storage_errors(f"load {self.label.lower()} {entity_id}"):
            row = (
                self.db.query(self.model)
                .options(*self._loaders(includes))
                .filter(self.model.id == entity_id)
                .first()
            )
        if row is None:
            raise NotFound(f"{self.label} not found")
        return row

    def create(self, data: dict):
        with self.storage_errors(f"create {self.label.lower()}"):
            self._check_references(data)
            row = self.model(**data)
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
        return row

    def update(self, entity_id: int, data: dict):
        row = self.get(entity_id)
        with self.storage_errors(f"update {self.label.lower()} {entity_id}"):
            self._check_required(data)
            self._check_references(data)
            for field, value in data.items():
                setattr(row, field, value)
            self.db.commit()
            self.db.refresh(row)
        return row

    def delete(self, entity_id: int) -> None:
        row = self.get(entity_id)
        with self.storage_errors(f"delete {self.label.lower()} {entity_id}"):
            self.db.delete(row)
            self.db.commit()


class StudentRepository(EntityRepository):
    model = Student
    label = "Student"
    relations = {"course": "course"}
    references = {"course_id": Course}
    required_fields = ("name", "email")


class CourseRepository(EntityRepository):
    model = Course
    label = "Course"
    relations = {"student": "students", "teacher": "teacher"}
    references = {"teacher_id": Teacher}
    required_fields = ("title",)


class TeacherRepository(EntityRepository):
    model = Teacher
    label = "Teacher"
    relations = {"course": "courses"}
    required_fields = ("name",)
