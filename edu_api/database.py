import logging

from sqlalchemy import create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker

from edu_api.core import config

logger = logging.getLogger(__name__)

DATABASE_URL = config.build_database_url()


def _engine_options(url) -> dict:
    if make_url(url).get_backend_name() == 'sqlite':
        return {'connect_args': {'check_same_thread': False}}
    return {
        'pool_size': config.DB_POOL_SIZE,
        'max_overflow': config.DB_MAX_OVERFLOW,
        'pool_pre_ping': True,
    }


engine = create_engine(DATABASE_URL, **_engine_options(DATABASE_URL))

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None) -> None:
    # Registers every model on Base before creating tables.
    from edu_api.models import assignment, course, user  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


def check_connection(bind=None) -> None:
    with (bind or engine).connect() as connection:
        now = connection.execute(text('SELECT CURRENT_TIMESTAMP')).scalar()
    logger.info('Database connection established at %s', now)
