class DatastoreError(Exception):
    """Reading from or writing to the datastore failed."""


class RecipeNotFound(DatastoreError):
    pass


class AmbiguousRecipe(DatastoreError):
    pass


class InvalidDraft(ValueError):
    """The submitted form could not be turned into rows."""


class RecipeCreateFailed(Exception):
    pass


class IngredientsCreateFailed(Exception):
    """The recipe row was written but its ingredients were not."""

    def __init__(self, message: str, *, recipe_id: str) -> None:
        super().__init__(message)
        self.recipe_id = recipe_id
