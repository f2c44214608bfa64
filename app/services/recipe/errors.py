class RecipeAIError(RuntimeError):
    """An OpenAI call failed or returned content that could not be used."""
