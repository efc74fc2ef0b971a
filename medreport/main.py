import uvicorn

from medreport.api.app import create_app
from medreport.config.settings import Settings
from medreport.logging.logger import Log


def main() -> None:
    """Entry point: load settings -> build pipeline -> serve HTTP API."""
    settings = Settings()
    Log.configure(settings.log_level)
    app = create_app(settings)
    Log.info(f"Server running on http://{settings.host}:{settings.port}")
    Log.info(f"Model provider: {settings.model_provider}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
