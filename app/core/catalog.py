"""Recipe records and the read-only catalog they live in."""

import json
import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple, Union
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("id", "name", "cuisine", "cookingTime", "ingredients")


@dataclass(frozen=True)
class Recipe:
    """Recipe data class."""
    id: str
    name: str
    cuisine: str
    cooking_time: int
    ingredients: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not isinstance(self.id, str) or not self.id:
            raise ValueError("Recipe id must be a non-empty string")
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError(f"Recipe {self.id!r} has an empty name")
        if not isinstance(self.cuisine, str) or not self.cuisine.strip():
            raise ValueError(f"Recipe {self.id!r} has an empty cuisine")
        if (
            isinstance(self.cooking_time, bool)
            or not isinstance(self.cooking_time, int)
            or self.cooking_time < 0
        ):
            raise ValueError(
                f"Recipe {self.id!r} has invalid cookingTime: {self.cooking_time!r}"
            )
        if not isinstance(self.ingredients, (list, tuple)):
            raise ValueError(f"Recipe {self.id!r} ingredients must be a list of strings")
        ingredients = tuple(self.ingredients)
        if not all(isinstance(ing, str) for ing in ingredients):
            raise ValueError(f"Recipe {self.id!r} has a non-string ingredient")
        object.__setattr__(self, "ingredients", ingredients)

    @property
    def ingredients_normalized(self) -> List[str]:
        """Return casefolded ingredients."""
        return [ing.casefold() for ing in self.ingredients]

    def to_dict(self) -> dict:
        """Convert to the wire representation."""
        return {
            "id": self.id,
            "name": self.name,
            "cuisine": self.cuisine,
            "cookingTime": self.cooking_time,
            "ingredients": list(self.ingredients)
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Recipe":
        """Create Recipe from its JSON representation."""
        missing = [name for name in REQUIRED_FIELDS if name not in data]
        if missing:
            raise ValueError(
                f"Recipe {data.get('id')!r} is missing {', '.join(missing)}"
            )
        return cls(
            id=data["id"],
            name=data["name"],
            cuisine=data["cuisine"],
            cooking_time=data["cookingTime"],
            ingredients=data["ingredients"]
        )


class Catalog:
    """Immutable, ordered collection of recipes with unique ids."""

    def __init__(self, recipes: Iterable[Recipe] = ()):
        recipes = tuple(recipes)
        index = {}
        for recipe in recipes:
            if recipe.id in index:
                raise ValueError(f"Duplicate recipe id: {recipe.id!r}")
            index[recipe.id] = recipe
        self._recipes = recipes
        self._by_id = index

    @classmethod
    def from_records(cls, records: Iterable[dict]) -> "Catalog":
        recipes = []
        for i, item in enumerate(records):
            if not isinstance(item, dict):
                raise ValueError(f"Recipe record {i} is not an object")
            recipes.append(Recipe.from_dict(item))
        return cls(recipes)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "Catalog":
        """Load a catalog from a JSON array of recipe objects."""
        file_path = Path(path)

        if not file_path.exists():
            raise FileNotFoundError(f"Recipe file not found: {file_path}")

        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, list):
            raise ValueError(f"Expected a JSON array of recipes in {file_path}")

        catalog = cls.from_records(data)
        logger.info(f"Loaded {len(catalog)} recipes from {file_path}")
        return catalog

    @property
    def recipes(self) -> Tuple[Recipe, ...]:
        return self._recipes

    def get(self, recipe_id: str) -> Optional[Recipe]:
        return self._by_id.get(recipe_id)

    def __len__(self) -> int:
        return len(self._recipes)

    def __iter__(self) -> Iterator[Recipe]:
        return iter(self._recipes)

    def __getitem__(self, index: int) -> Recipe:
        return self._recipes[index]
