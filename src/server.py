import uvicorn
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import os
from pathlib import Path
from fastapi.routing import APIRouter
from loguru import logger as log
from src.utils.logging_config import setup_logging
from src.services.editor.registry import EditorSessionRegistry
from common import global_config

# Setup logging before anything else
setup_logging()


def bootstrap_database():
    """Create tables and load the seed templates, if a seed file is configured."""
    from src.db.database import engine, use_db_session
    from src.db.models import create_all_tables
    from src.services.templates.loader import TemplateLoader
    from src.services.templates.repository import TemplateRepository

    create_all_tables(engine)

    seed_file = global_config.database.seed_file
    if not seed_file:
        return

    with use_db_session() as db:
        count = TemplateRepository(db).seed_from(TemplateLoader(Path(seed_file)))
    log.info(f"Seeded {count} templates from {seed_file}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    bootstrap_database()
    yield


# Initialize FastAPI app
app = FastAPI(lifespan=lifespan)

# Open editor sessions live in process memory
app.state.editor_sessions = EditorSessionRegistry()

# Add CORS middleware with specific allowed origins
app.add_middleware(  # type: ignore[call-overload]
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=global_config.server.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Automatically discover and include all routers
def include_all_routers():
    from src.api.routes import all_routers

    main_router = APIRouter()
    for router in all_routers:
        main_router.include_router(router)

    return main_router


app.include_router(include_all_routers())


if __name__ == "__main__":
    # Configure uvicorn to use our logging config
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8080)),
        log_config=None,  # Disable uvicorn's logging config
        access_log=True,  # Enable access logs
    )
