"""CRUD routers for students, courses and teachers.

All three are built by ``build_resource_router`` from a repository class,
the request/response schemas and the schemas of the relations they embed.
"""

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from school_api.database import get_db
from school_api.query_options import MAX_SQL_INT, QueryOptions, build_query_options, page_payload
from school_api.repositories.entities import (
    CourseRepository,
    EntityRepository,
    StudentRepository,
    TeacherRepository,
)
from school_api.schemas import (
    ApiModel,
    CourseCreate,
    CourseRead,
    CourseUpdate,
    DeletedResponse,
    StudentCreate,
    StudentRead,
    StudentUpdate,
    TeacherCreate,
    TeacherRead,
    TeacherUpdate,
    dump_entity,
)


class ListQuery:
    """Raw ``limit``/``page``/``sort``/``populate`` parameters, kept as strings.

    They are parsed by ``build_query_options`` so that odd values ("-5",
    "12abc") fall back or get floored instead of failing validation.
    """

    def __init__(
        self,
        limit: str | None = Query(None, description='Number of records per page (default 10, max 1000)'),
        page: str | None = Query(None, description='Page number (default 1)'),
        sort: str | None = Query(None, description='Sort direction of created time: asc or desc'),
        populate: str | None = Query(None, description='Comma-separated relations to include, or "all"'),
    ) -> None:
        self.raw = {'limit': limit, 'page': page, 'sort': sort, 'populate': populate}

    def options(self, relations) -> QueryOptions:
        return build_query_options(self.raw, relations)


def build_resource_router(
    repository_class: type[EntityRepository],
    create_schema: type[ApiModel],
    update_schema: type[ApiModel],
    read_schema: type[ApiModel],
    embedded_schemas: dict[str, type[ApiModel]],
    tag: str,
) -> APIRouter:
    router = APIRouter(tags=[tag])
    label = repository_class.label.lower()
    relation_names = repository_class.relation_names()
    populate_help = f"Relations to include ({', '.join(relation_names)} or all)"

    def get_repository(db: Session = Depends(get_db)) -> EntityRepository:
        return repository_class(db)

    def dump(row, includes=()) -> dict:
        embedded = {repository_class.relations[name]: embedded_schemas[name] for name in includes}
        return dump_entity(row, read_schema, embedded)

    @router.post('', status_code=status.HTTP_201_CREATED, name=f'create_{label}')
    def create_entity(payload: create_schema, repository: EntityRepository = Depends(get_repository)):
        return dump(repository.create(payload.model_dump()))

    @router.get('', name=f'list_{label}s')
    def list_entities(query: ListQuery = Depends(), repository: EntityRepository = Depends(get_repository)):
        options = query.options(relation_names)
        total, rows = repository.list(options)
        return page_payload(total, options, [dump(row, options.includes) for row in rows])

    @router.get('/{entity_id}', name=f'get_{label}')
    def get_entity(
        entity_id: int = Path(..., le=MAX_SQL_INT),
        populate: str | None = Query(None, description=populate_help),
        repository: EntityRepository = Depends(get_repository),
    ):
        options = build_query_options({'populate': populate}, relation_names)
        return dump(repository.get(entity_id, options.includes), options.includes)

    @router.put('/{entity_id}', name=f'update_{label}')
    def update_entity(
        payload: update_schema,
        entity_id: int = Path(..., le=MAX_SQL_INT),
        repository: EntityRepository = Depends(get_repository),
    ):
        return dump(repository.update(entity_id, payload.model_dump(exclude_unset=True)))

    @router.delete('/{entity_id}', response_model=DeletedResponse, name=f'delete_{label}')
    def delete_entity(
        entity_id: int = Path(..., le=MAX_SQL_INT),
        repository: EntityRepository = Depends(get_repository),
    ):
        repository.delete(entity_id)
        return {'message': 'Deleted'}

    return router


student_router = build_resource_router(
    StudentRepository,
    StudentCreate,
    StudentUpdate,
    StudentRead,
    {'course': CourseRead},
    tag='Students',
)

course_router = build_resource_router(
    CourseRepository,
    CourseCreate,
    CourseUpdate,
    CourseRead,
    {'student': StudentRead, 'teacher': TeacherRead},
    tag='Courses',
)

teacher_router = build_resource_router(
    TeacherRepository,
    TeacherCreate,
    TeacherUpdate,
    TeacherRead,
    {'course': CourseRead},
    tag='Teachers',
)
