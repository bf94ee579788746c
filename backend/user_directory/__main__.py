"""Run the API with uvicorn: `python -m user_directory`.

uvicorn installs the SIGINT/SIGTERM handlers: it stops accepting connections,
drains in-flight requests, then exits the lifespan, which closes the database.
"""

import uvicorn

from user_directory.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "user_directory.main:app",
        host=settings.host,
        port=settings.port,
        access_log=False,  # RequestLoggingMiddleware writes the access log
    )


if __name__ == "__main__":
    main()
