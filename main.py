"""Main entry point for running the FastAPI application with auto-reload."""
import uvicorn

from hub.config import settings

if __name__ == "__main__":
    print(f"Starting {settings.app_name} v{settings.version}")
    print(f"Debug mode: {settings.debug}")
    print(f"Database: {settings.db.url.split('@')[-1] if '@' in settings.db.url else settings.db.url}")
    print(f"Term matcher: {settings.matching.term_matcher}")
    print("-" * 50)

    uvicorn.run(
        "hub.api:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.debug,
        reload_dirs=["hub"] if settings.debug else None,
        log_level=settings.logging.level.lower(),
    )
