import logging
from collections.abc import Iterable

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from school_api.auth.dependencies import require_authenticated_user
from school_api.core import config
from school_api.core.errors import SchoolApiError
from school_api.database import init_db
from school_api.routes import auth_routes, resource_routes

logger = logging.getLogger(__name__)

RESOURCE_ROUTERS = {
    'students': resource_routes.student_router,
    'courses': resource_routes.course_router,
    'teachers': resource_routes.teacher_router,
}

OPENAPI_TAGS = [
    {'name': 'Auth', 'description': 'Authentication routes (register, login)'},
    {'name': 'Students', 'description': 'Student management'},
    {'name': 'Courses', 'description': 'Course management'},
    {'name': 'Teachers', 'description': 'Teacher management'},
]


def _describe_validation_error(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = '.'.join(str(part) for part in error.get('loc', ()) if part != 'body')
        messages.append(f"{location}: {error.get('msg')}" if location else str(error.get('msg')))
    return '; '.join(messages) or 'Invalid request'


def create_app(protected_resources: Iterable[str] | None = None) -> FastAPI:
    protected = set(config.PROTECTED_RESOURCES if protected_resources is None else protected_resources)
    unknown = protected - set(RESOURCE_ROUTERS)
    if unknown:
        raise RuntimeError(f"Unknown protected resources: {', '.join(sorted(unknown))}")

    app = FastAPI(
        title='School API',
        version='1.0.0',
        description='API for managing students, courses, and teachers',
        openapi_tags=OPENAPI_TAGS,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    @app.exception_handler(SchoolApiError)
    async def handle_school_api_error(request: Request, exc: SchoolApiError):
        return JSONResponse({'message': exc.message}, status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(
            {'message': _describe_validation_error(exc)},
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    @app.on_event('startup')
    def initialize_database() -> None:
        config.validate_runtime_config()
        try:
            init_db()
        except SQLAlchemyError:
            logger.exception('Database initialization failed. Check DATABASE_URL.')

    @app.get('/')
    def root():
        return {'status': 'School API Running'}

    app.include_router(auth_routes.router, prefix='/auth')
    for name, router in RESOURCE_ROUTERS.items():
        dependencies = [Depends(require_authenticated_user)] if name in protected else []
        app.include_router(router, prefix=f'/{name}', dependencies=dependencies)

    logger.info('Bearer token required for: %s', ', '.join(sorted(protected)) or 'none')
    return app


app = create_app()
