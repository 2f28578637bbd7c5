"""Run the API with uvicorn.

Usage:
    python -m edu_api.serve
"""
import uvicorn

from edu_api.core import config


def main() -> None:
    uvicorn.run("edu_api.main:app", host="0.0.0.0", port=config.PORT, log_level=config.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
