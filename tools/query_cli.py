#!/usr/bin/env python3
"""
CLI tool for querying the recipe catalog from the command line.
Usage: python tools/query_cli.py --cuisine italian
"""

import argparse
import json
import random
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.catalog import Catalog
from app.core.errors import RecipeAPIError
from app.core.params import CuisineQuery, MaxTimeQuery, NameQuery, SampleQuery
from app.core.queries import QueryEngine
from config.settings import get_settings


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Query the recipe catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python tools/query_cli.py --all
  python tools/query_cli.py --name soup
  python tools/query_cli.py --cuisine italian --json
  python tools/query_cli.py --max-time 20
  python tools/query_cli.py --ingredient garlic
  python tools/query_cli.py --random 2 --seed 42
  python tools/query_cli.py --list-cuisines
        """
    )

    action = parser.add_mutually_exclusive_group(required=True)
    action.add_argument("--all", action="store_true", help="List every recipe")
    action.add_argument("--id", dest="recipe_id", type=str, help="Look up a recipe by ID")
    action.add_argument("-n", "--name", type=str, help="Search recipe names")
    action.add_argument("-c", "--cuisine", type=str, help="Filter by cuisine")
    action.add_argument("-t", "--max-time", type=str, help="Maximum cooking time in minutes")
    action.add_argument("-i", "--ingredient", type=str, help="Search by ingredient")
    action.add_argument("-r", "--random", type=str, metavar="COUNT", help="Random sample of recipes")
    action.add_argument("--list-cuisines", action="store_true", help="List all cuisines")

    parser.add_argument(
        "--recipes-file",
        type=str,
        default=None,
        help="Path to the recipes JSON file (default: configured catalog)"
    )

    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for --random"
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Output results as JSON"
    )

    return parser.parse_args(argv)


def format_recipe(recipe):
    """Format a recipe for display."""
    output = []
    output.append(f"\n{'='*60}")
    output.append(f"  [{recipe.id}] {recipe.name}")
    output.append(f"  Cuisine: {recipe.cuisine} | Cooking time: {recipe.cooking_time} min")
    output.append(f"{'='*60}")
    output.append(f"  Ingredients: {', '.join(recipe.ingredients)}")
    return "\n".join(output)


def run_query(args, engine):
    """Run the selected operation and return recipes or cuisine names."""
    if args.all:
        return engine.list_all()
    if args.recipe_id is not None:
        return [engine.get_by_id(args.recipe_id)]
    if args.name is not None:
        return engine.search_by_name(NameQuery.parse(args.name, label="Name"))
    if args.cuisine is not None:
        return engine.filter_by_cuisine(CuisineQuery.parse(args.cuisine))
    if args.max_time is not None:
        return engine.filter_by_max_time(MaxTimeQuery.parse(args.max_time))
    if args.ingredient is not None:
        return engine.search_by_ingredient(NameQuery.parse(args.ingredient, label="Ingredient name"))
    if args.random is not None:
        return engine.random_sample(SampleQuery.parse(args.random))
    return engine.distinct_cuisines()


def main(argv=None):
    """Main CLI entry point."""
    args = parse_args(argv)
    path = args.recipes_file or get_settings().recipes_path

    try:
        catalog = Catalog.load(path)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    rng = random.Random(args.seed) if args.seed is not None else None
    engine = QueryEngine(catalog, rng=rng)

    try:
        results = run_query(args, engine)
    except RecipeAPIError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    if args.list_cuisines:
        if args.json:
            print(json.dumps({"count": len(results), "data": results}, indent=2))
        else:
            print("Available cuisines:")
            for cuisine in results:
                print(f"  - {cuisine}")
        return 0

    if args.json:
        print(json.dumps({"count": len(results), "data": [r.to_dict() for r in results]}, indent=2))
    elif not results:
        print("No matching recipes found.")
    else:
        print(f"Found {len(results)} recipe(s):")
        for recipe in results:
            print(format_recipe(recipe))

    return 0


if __name__ == "__main__":
    sys.exit(main())
