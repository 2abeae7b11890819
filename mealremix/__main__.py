import uvicorn

from mealremix.config import Config, Env


def main() -> None:
    config = Config()
    uvicorn.run(
        "mealremix.app:app",
        host=config.host,
        port=config.port,
        reload=config.env == Env.local,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
