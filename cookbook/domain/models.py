from enum import Enum
from typing import Any, Mapping


class Difficulty(Enum):
    easy = "easy"
    medium = "medium"
    hard = "hard"


class Recipe:
    def __init__(
        self,
        *,
        id: str,
        title: str,
        description: str,
        instructions: str,
        cooking_time: int,
        servings: int,
        difficulty: Difficulty,
        image_url: str | None,
        calories: float,
        protein: float,
        carbs: float,
        fat: float,
    ) -> None:
        self.id = id
        self.title = title
        self.description = description
        self.instructions = instructions
        self.cooking_time = cooking_time
        self.servings = servings
        self.difficulty = difficulty
        self.image_url = image_url
        self.calories = calories
        self.protein = protein
        self.carbs = carbs
        self.fat = fat

    def __repr__(self) -> str:
        return f"<Recipe(id={self.id}, title={self.title})>"

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Recipe":
        return cls(
            id=str(row["id"]),
            title=row["title"],
            description=row["description"] or "",
            instructions=row["instructions"] or "",
            cooking_time=int(row["cooking_time"]),
            servings=int(row["servings"]),
            difficulty=Difficulty(row["difficulty"]),
            image_url=row["image_url"] or None,
            calories=float(row["calories"]),
            protein=float(row["protein"]),
            carbs=float(row["carbs"]),
            fat=float(row["fat"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "instructions": self.instructions,
            "cooking_time": self.cooking_time,
            "servings": self.servings,
            "difficulty": self.difficulty.value,
            "image_url": self.image_url,
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
        }


class Ingredient:
    def __init__(
        self,
        *,
        id: str,
        recipe_id: str,
        name: str,
        amount: float,
        unit: str,
    ) -> None:
        self.id = id
        self.recipe_id = recipe_id
        self.name = name
        self.amount = amount
        self.unit = unit

    def __repr__(self) -> str:
        return f"<Ingredient(name={self.name}, recipe_id={self.recipe_id})>"

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Ingredient":
        return cls(
            id=str(row["id"]),
            recipe_id=str(row["recipe_id"]),
            name=row["name"],
            amount=float(row["amount"]),
            unit=row["unit"] or "",
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "recipe_id": self.recipe_id,
            "name": self.name,
            "amount": self.amount,
            "unit": self.unit,
        }
