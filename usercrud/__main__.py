"""Run the server: `python -m usercrud` or the `usercrud` console script."""

import uvicorn

from usercrud.config import HOST, settings


def main() -> None:
    uvicorn.run(
        "usercrud.main:app",
        host=HOST,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
