from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Plain confirmation message"""
    message: str


class StatsResponse(BaseModel):
    total_users: int
    total_recipes: int
    total_reviews: int
    ai_requests: int  # proxy: equals total_recipes
