"""Unit tests for the query engine and its parameter parsing."""

import pytest
import random
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.catalog import Catalog, Recipe
from app.core.errors import InvalidInput, NotFound
from app.core.params import CuisineQuery, MaxTimeQuery, NameQuery, SampleQuery
from app.core.queries import QueryEngine


@pytest.fixture
def scenario_catalog():
    """The two-recipe catalog used throughout the examples."""
    return Catalog([
        Recipe(id="r1", name="Tomato Soup", cuisine="Italian", cooking_time=20,
               ingredients=["tomato", "basil"]),
        Recipe(id="r2", name="Sushi Roll", cuisine="Japanese", cooking_time=45,
               ingredients=["rice", "nori", "fish"]),
    ])


@pytest.fixture
def catalog():
    return Catalog([
        Recipe(id="a", name="Pasta Primavera", cuisine="Italian", cooking_time=30,
               ingredients=["Pasta", "Zucchini"]),
        Recipe(id="b", name="Chicken Curry", cuisine="Indian", cooking_time=50,
               ingredients=["chicken thigh", "curry paste"]),
        Recipe(id="c", name="Pasta al Limone", cuisine="italian", cooking_time=15,
               ingredients=["pasta", "lemon"]),
        Recipe(id="d", name="Dal", cuisine="Indian", cooking_time=40,
               ingredients=["lentils"]),
        Recipe(id="e", name="Ramen", cuisine="Japanese", cooking_time=50,
               ingredients=["noodles", "Chicken stock"]),
    ])


@pytest.fixture
def engine(catalog):
    return QueryEngine(catalog, rng=random.Random(1234))


def ids(recipes):
    return [r.id for r in recipes]


class TestScenario:
    """The worked example over a two-recipe catalog."""

    @pytest.fixture
    def engine(self, scenario_catalog):
        return QueryEngine(scenario_catalog)

    def test_max_time(self, engine):
        assert ids(engine.filter_by_max_time(MaxTimeQuery.parse("30"))) == ["r1"]

    def test_ingredient(self, engine):
        assert ids(engine.search_by_ingredient(NameQuery.parse("fish"))) == ["r2"]

    def test_cuisine(self, engine):
        assert ids(engine.filter_by_cuisine(CuisineQuery.parse("italian"))) == ["r1"]

    def test_missing_id(self, engine):
        with pytest.raises(NotFound):
            engine.get_by_id("r3")


class TestLookups:
    """Tests for list-all and get-by-id."""

    def test_list_all_in_catalog_order(self, engine):
        assert ids(engine.list_all()) == ["a", "b", "c", "d", "e"]

    def test_list_all_returns_copy(self, engine, catalog):
        """Test that mutating the result leaves the catalog untouched."""
        result = engine.list_all()
        result.clear()

        assert len(catalog) == 5

    def test_get_by_id(self, engine):
        assert engine.get_by_id("c").name == "Pasta al Limone"

    def test_get_by_id_is_exact(self, engine):
        """Test that id matching is case-sensitive."""
        with pytest.raises(NotFound):
            engine.get_by_id("A")


class TestSearch:
    """Tests for name, ingredient and cuisine matching."""

    def test_name_substring_case_insensitive(self, engine):
        assert ids(engine.search_by_name(NameQuery.parse("PASTA"))) == ["a", "c"]

    def test_name_no_match_is_empty(self, engine):
        assert engine.search_by_name(NameQuery.parse("pizza")) == []

    def test_ingredient_matches_any_element(self, engine):
        assert ids(engine.search_by_ingredient(NameQuery.parse("chicken"))) == ["b", "e"]

    def test_ingredient_substring(self, engine):
        assert ids(engine.search_by_ingredient(NameQuery.parse("past"))) == ["a", "b", "c"]

    def test_cuisine_case_insensitive(self, engine):
        upper = engine.filter_by_cuisine(CuisineQuery.parse("Italian"))
        lower = engine.filter_by_cuisine(CuisineQuery.parse("italian"))

        assert ids(upper) == ids(lower) == ["a", "c"]

    def test_cuisine_is_exact_not_substring(self, engine):
        assert engine.filter_by_cuisine(CuisineQuery.parse("Ital")) == []


class TestMaxTime:
    """Tests for the cooking-time filter."""

    def test_inclusive_boundary(self, engine):
        assert ids(engine.filter_by_max_time(MaxTimeQuery.parse("40"))) == ["a", "c", "d"]

    def test_maximum_returns_everything(self, engine, catalog):
        longest = max(r.cooking_time for r in catalog)

        result = engine.filter_by_max_time(MaxTimeQuery.parse(longest))

        assert ids(result) == ids(catalog)

    def test_below_everything_is_empty(self, engine):
        assert engine.filter_by_max_time(MaxTimeQuery.parse(1)) == []


class TestRandomSample:
    """Tests for sampling without replacement."""

    @pytest.mark.parametrize("count", [0, 1, 3, 5, 10])
    def test_size_and_uniqueness(self, engine, catalog, count):
        sample = engine.random_sample(SampleQuery(count=count))

        assert len(sample) == min(count, len(catalog))
        assert len(set(ids(sample))) == len(sample)
        assert all(r in catalog.recipes for r in sample)

    def test_negative_count_is_empty(self, engine):
        assert engine.random_sample(SampleQuery(count=-2)) == []

    def test_seeded_sampling_is_reproducible(self, catalog):
        first = QueryEngine(catalog, rng=random.Random(7)).random_sample(SampleQuery(count=3))
        second = QueryEngine(catalog, rng=random.Random(7)).random_sample(SampleQuery(count=3))

        assert ids(first) == ids(second)

    def test_every_recipe_can_be_drawn_first(self, engine, catalog):
        """Test that the first slot is not biased toward catalog order."""
        seen = {engine.random_sample(SampleQuery(count=1))[0].id for _ in range(200)}

        assert seen == set(ids(catalog))

    def test_catalog_order_untouched(self, engine, catalog):
        engine.random_sample(SampleQuery(count=5))

        assert ids(catalog) == ["a", "b", "c", "d", "e"]


class TestDistinctCuisines:
    """Tests for cuisine extraction."""

    def test_first_occurrence_order(self, engine):
        """Test that dedupe is case-sensitive and keeps first appearance."""
        assert engine.distinct_cuisines() == ["Italian", "Indian", "italian", "Japanese"]

    def test_empty_catalog(self):
        assert QueryEngine(Catalog()).distinct_cuisines() == []


class TestParams:
    """Tests for boundary validation of query parameters."""

    @pytest.mark.parametrize("raw", [None, ""])
    def test_name_required(self, raw):
        with pytest.raises(InvalidInput):
            NameQuery.parse(raw)

    def test_name_label_in_message(self):
        with pytest.raises(InvalidInput, match="Ingredient name"):
            NameQuery.parse("", label="Ingredient name")

    @pytest.mark.parametrize("raw", [None, "", "0", "-5", 0, -1, "abc", "1.5", True, "1_0", "３０", "+"])
    def test_max_time_must_be_positive_integer(self, raw):
        with pytest.raises(InvalidInput):
            MaxTimeQuery.parse(raw)

    @pytest.mark.parametrize("raw,expected", [("30", 30), (" 15 ", 15), (45, 45)])
    def test_max_time_parsed(self, raw, expected):
        assert MaxTimeQuery.parse(raw).max_minutes == expected

    def test_sample_defaults(self):
        assert SampleQuery.parse(None).count == 3
        assert SampleQuery.parse("", default=5).count == 5

    @pytest.mark.parametrize("raw,expected", [("0", 0), ("-3", -3), ("7", 7)])
    def test_sample_parsed(self, raw, expected):
        assert SampleQuery.parse(raw).count == expected

    def test_sample_rejects_garbage(self):
        with pytest.raises(InvalidInput):
            SampleQuery.parse("many")

    def test_cuisine_required(self):
        with pytest.raises(InvalidInput):
            CuisineQuery.parse("")
