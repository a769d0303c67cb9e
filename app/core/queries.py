"""Filter, search and aggregate operations over the recipe catalog."""

import random
import threading
from typing import List, Optional

from .catalog import Catalog, Recipe
from .errors import NotFound
from .params import CuisineQuery, MaxTimeQuery, NameQuery, SampleQuery


class QueryEngine:
    """Read-only query operations over a catalog.

    Every operation is a single pass over the catalog and returns a new list,
    so callers can never mutate shared state. Multi-result operations return
    an empty list when nothing matches; only ``get_by_id`` reports a miss as
    an error.
    """

    def __init__(self, catalog: Catalog, rng: Optional[random.Random] = None):
        self.catalog = catalog
        self._rng = rng if rng is not None else random.Random()
        self._rng_lock = threading.Lock()

    def list_all(self) -> List[Recipe]:
        return list(self.catalog)

    def get_by_id(self, recipe_id: str) -> Recipe:
        """Get a recipe by its exact id."""
        recipe = self.catalog.get(recipe_id)
        if recipe is None:
            raise NotFound("Recipe not found")
        return recipe

    def search_by_name(self, query: NameQuery) -> List[Recipe]:
        """Case-insensitive substring search on recipe names."""
        term = query.folded
        return [r for r in self.catalog if term in r.name.casefold()]

    def filter_by_cuisine(self, query: CuisineQuery) -> List[Recipe]:
        """Case-insensitive exact match on cuisine."""
        cuisine = query.folded
        return [r for r in self.catalog if r.cuisine.casefold() == cuisine]

    def filter_by_max_time(self, query: MaxTimeQuery) -> List[Recipe]:
        """Recipes that cook in at most ``query.max_minutes`` minutes."""
        return [r for r in self.catalog if r.cooking_time <= query.max_minutes]

    def search_by_ingredient(self, query: NameQuery) -> List[Recipe]:
        """Recipes with at least one ingredient containing the term."""
        term = query.folded
        return [
            r for r in self.catalog
            if any(term in ing for ing in r.ingredients_normalized)
        ]

    def random_sample(self, query: SampleQuery) -> List[Recipe]:
        """Sample without replacement using a partial Fisher-Yates shuffle.

        Only the first ``k`` positions of a scratch copy are shuffled, so the
        cost is O(k) swaps on top of the copy.
        """
        pool = list(self.catalog)
        k = min(max(query.count, 0), len(pool))
        with self._rng_lock:
            for i in range(k):
                j = self._rng.randrange(i, len(pool))
                pool[i], pool[j] = pool[j], pool[i]
        return pool[:k]

    def distinct_cuisines(self) -> List[str]:
        """Cuisines in order of first appearance, deduplicated case-sensitively."""
        seen = set()
        cuisines = []
        for recipe in self.catalog:
            if recipe.cuisine not in seen:
                seen.add(recipe.cuisine)
                cuisines.append(recipe.cuisine)
        return cuisines
