"""
Shared fixtures: an app bound to an in-memory SQLite database, a TestClient,
token helpers for the identity provider and factories for common rows.
"""
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import jwt
import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app
from app.models.recipe import Recipe
from app.models.review import Review
from app.models.user import User, ROLE_USER
from app.services.recipe.dish_identification import DishIdentificationService
from app.services.recipe.image_generation import RecipeImageService
from app.services.recipe.recipe_generation import RecipeGenerationService


TEST_SECRET = "test-secret"


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite://",
        openai_api_key="sk-test",
        auth_jwt_secret=TEST_SECRET,
        max_upload_bytes=1024,
    )


@pytest.fixture
def app(settings):
    app = create_app(settings)
    app.state.recipe_generator = MagicMock(spec=RecipeGenerationService)
    app.state.dish_identifier = MagicMock(spec=DishIdentificationService)
    image_generator = MagicMock(spec=RecipeImageService)
    image_generator.generate_image.return_value = "https://images.example.com/dish.png"
    app.state.image_generator = image_generator
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db(client, app):
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


def make_token(subject, secret=TEST_SECRET, expires_in=timedelta(hours=1), **claims):
    now = datetime.now(timezone.utc)
    payload = {"sub": subject, "iat": now, "exp": now + expires_in, **claims}
    return jwt.encode(payload, secret, algorithm="HS256")


def auth_headers(user_or_id, **claims):
    subject = user_or_id if isinstance(user_or_id, str) else user_or_id.id
    return {"Authorization": f"Bearer {make_token(subject, **claims)}"}


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make_user(role=ROLE_USER, **fields):
        counter["n"] += 1
        user = User(
            id=fields.pop("id", f"user-{counter['n']}"),
            email=fields.pop("email", f"user{counter['n']}@example.com"),
            first_name=fields.pop("first_name", f"User{counter['n']}"),
            role=role,
            **fields,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_recipe(db):
    def _make_recipe(owner=None, **fields):
        data = {
            "name": "Pancakes",
            "description": "Fluffy breakfast pancakes",
            "ingredients": ["flour", "egg", "milk"],
            "instructions": ["Mix", "Cook"],
            "cooking_time": 20,
            "difficulty": "easy",
            "cuisine": "american",
            "servings": 2,
        }
        data.update(fields)
        recipe = Recipe(user_id=owner.id if owner else None, **data)
        db.add(recipe)
        db.commit()
        db.refresh(recipe)
        return recipe

    return _make_recipe


@pytest.fixture
def make_review(db):
    def _make_review(recipe, author, rating=4, **fields):
        review = Review(recipe_id=recipe.id, user_id=author.id, rating=rating, **fields)
        db.add(review)
        db.commit()
        db.refresh(review)
        return review

    return _make_review
