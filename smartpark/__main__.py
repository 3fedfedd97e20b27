"""Run the API server with uvicorn."""

import uvicorn

from smartpark.config import settings


def main():
    uvicorn.run(
        "smartpark.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
