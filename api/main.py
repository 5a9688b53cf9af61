import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from core.db import Database
from core.errors import register_error_handlers
from core.logging_config import setup_logging
from core.settings import env_int
from lists import router as lists_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One data-access context per process.
    db = Database.from_env()
    await db.open()
    app.state.db = db
    try:
        yield
    finally:
        await db.close()


def create_app() -> FastAPI:
    setup_logging()

    app = FastAPI(title="lists-api", lifespan=lifespan)
    register_error_handlers(app)
    app.include_router(lists_router.router, tags=["lists"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()


def run() -> None:
    """
    Serve the app with uvicorn. Host and port come from HOST / PORT.
    """
    uvicorn.run(
        app,
        host=os.environ.get("HOST", "0.0.0.0").strip() or "0.0.0.0",
        port=env_int("PORT", 8000),
        log_config=None,
    )


if __name__ == "__main__":
    run()
