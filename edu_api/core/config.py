import os

from dotenv import load_dotenv
from sqlalchemy.engine import URL

from edu_api.core.errors import ConfigError

load_dotenv()


def _get_int(value: str | None, default: int) -> int:
    if value is None or not value.strip():
        return default
    return int(value)


APP_ENV = os.getenv("APP_ENV", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
PORT = _get_int(os.getenv("PORT"), 3000)

DB_HOST = os.getenv("DB_HOST", "localhost")
DB_PORT = _get_int(os.getenv("DB_PORT"), 5432)
DB_USER = os.getenv("DB_USER")
DB_PASSWORD = os.getenv("DB_PASSWORD")
DB_NAME = os.getenv("DB_NAME")
DB_POOL_SIZE = _get_int(os.getenv("DB_POOL_SIZE"), 5)
DB_MAX_OVERFLOW = _get_int(os.getenv("DB_MAX_OVERFLOW"), 10)

AWS_ACCESS_KEY_ID = os.getenv("AWS_ACCESS_KEY_ID")
AWS_SECRET_ACCESS_KEY = os.getenv("AWS_SECRET_ACCESS_KEY")
AWS_REGION = os.getenv("AWS_REGION", "eu-central-1")
AWS_ENDPOINT_URL = os.getenv("AWS_ENDPOINT_URL")  # e.g. http://localhost:4566 for LocalStack
S3_BUCKET = os.getenv("S3_BUCKET", "assignment-api-bucket")

JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRES_MINUTES = _get_int(os.getenv("JWT_EXPIRES_MINUTES"), 24 * 60)

BCRYPT_ROUNDS = _get_int(os.getenv("BCRYPT_ROUNDS"), 8)


def build_database_url() -> str | URL:
    explicit_url = os.getenv("DATABASE_URL")
    if explicit_url:
        return explicit_url
    return URL.create(
        "postgresql+psycopg2",
        username=DB_USER,
        password=DB_PASSWORD,
        host=DB_HOST,
        port=DB_PORT,
        database=DB_NAME,
    )


def validate_runtime_config() -> None:
    if APP_ENV.lower() == "production" and not JWT_SECRET_KEY:
        raise ConfigError("JWT_SECRET_KEY must be set in production.")
