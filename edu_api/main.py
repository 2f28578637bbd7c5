import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from edu_api.core import config
from edu_api.core.errors import register_exception_handlers
from edu_api.database import check_connection, init_db
from edu_api.routes import assignment_routes, attachment_routes, course_routes, tracking_routes, user_routes

logging.basicConfig(level=config.LOG_LEVEL, format='%(asctime)s %(levelname)s %(name)s: %(message)s')

app = FastAPI(title='Course Assignments API')

app.add_middleware(
    CORSMiddleware,
    allow_origins=['*'],
    allow_methods=['*'],
    allow_headers=['*'],
)

register_exception_handlers(app)

logger = logging.getLogger(__name__)


@app.on_event('startup')
def initialize_database() -> None:
    config.validate_runtime_config()
    try:
        init_db()
        check_connection()
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DB_* settings and Postgres credentials.')


@app.get('/')
def root():
    return {'info': 'FastAPI and Postgres API'}


app.include_router(user_routes.router)
app.include_router(tracking_routes.router)
app.include_router(course_routes.router)
app.include_router(assignment_routes.router)
app.include_router(attachment_routes.router)
