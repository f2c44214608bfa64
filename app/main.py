import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import Settings, get_settings
from app.core.database import create_db_engine, create_session_factory, init_db
from app.core.errors import register_exception_handlers
from app.core.logging import configure_logging
from app.models import contact_message, recipe, review, saved_recipe, site_settings, user  # noqa: F401
from app.routers import admin, auth, contact, recipes, reviews, saved_recipes
from app.services.recipe.dish_identification import DishIdentificationService
from app.services.recipe.image_generation import RecipeImageService
from app.services.recipe.recipe_generation import RecipeGenerationService


logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application; engine, sessions and AI services live on app.state."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db(app.state.engine)
        logger.info("Database ready")
        yield
        app.state.engine.dispose()

    app = FastAPI(
        title="Recipe Share Backend",
        version="0.1.0",
        lifespan=lifespan
    )

    engine = create_db_engine(settings.database_url)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.recipe_generator = RecipeGenerationService(settings)
    app.state.dish_identifier = DishIdentificationService(settings)
    app.state.image_generator = RecipeImageService(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    api = APIRouter(prefix="/api")
    api.include_router(auth.router)
    api.include_router(recipes.router)
    api.include_router(reviews.router)
    api.include_router(saved_recipes.router)
    api.include_router(contact.router)
    api.include_router(admin.router)
    app.include_router(api)

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    return app


app = create_app()
