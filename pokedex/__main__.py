"""Run the API with uvicorn: `python -m pokedex`."""

import uvicorn

from pokedex.config import settings


def main() -> None:
    uvicorn.run(
        "pokedex.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
