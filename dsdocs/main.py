import uvicorn

from dsdocs.core.config import get_app_config


def main(host: str = "0.0.0.0", port: int = 8000, reload: bool = False):
    """Main entry point for the DSDOCS web service."""
    config = get_app_config()
    config.configure_logging()

    # Start FastAPI application
    uvicorn.run(
        "dsdocs.api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


if __name__ == "__main__":
    main()
