
import logging
import sys
from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from docannotate.config import settings
from docannotate.db import session as db_session
from docannotate.errors import AnnotationError, annotation_error_handler, request_validation_handler
from docannotate.preferences.store import PreferencesStore
from docannotate.auth.deps import get_store
from docannotate.storage import AnnotationStore, MemoryStore
from docannotate.auth.routes import router as auth_router
from docannotate.documents.routes import router as documents_router
from docannotate.uploads.routes import router as upload_router
from docannotate.comments.routes import router as comments_router
from docannotate.highlights.routes import router as highlights_router
from docannotate.relations.routes import router as relations_router
from docannotate.preferences.routes import router as preferences_router

logger = logging.getLogger(__name__)

def configure_logging():
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title=settings.app_name)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AnnotationError, annotation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.state.memory_store = MemoryStore()
    app.state.preferences = PreferencesStore(settings.preferences_path)
    app.state.import_transport = None

    app.include_router(auth_router)
    app.include_router(upload_router)
    app.include_router(documents_router)
    app.include_router(comments_router)
    app.include_router(highlights_router)
    app.include_router(relations_router)
    app.include_router(preferences_router)

    @app.on_event("startup")
    def on_startup():
        if db_session.engine is None:
            logger.warning("DATABASE_URL is not set; using the in-memory store")
        else:
            db_session.init_db()
            logger.info("Database schema ready")

    @app.get("/health", tags=["root"])
    def health(store: AnnotationStore = Depends(get_store)):
        return {"status": "ok", "store": store.kind}

    @app.get("/", tags=["root"])
    def root():
        return {"name": settings.app_name, "env": settings.app_env}

    return app

app = create_app()
