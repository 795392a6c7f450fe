"""Category and word reference data."""

from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Union

import yaml


@dataclass(frozen=True)
class Category:
    """A topic and the secret words that can be drawn from it."""

    name: str
    words: tuple[str, ...]

    def __post_init__(self):
        if not self.words:
            raise ValueError(f"Category {self.name!r} has no words")

    def __str__(self) -> str:
        return self.name


def build_categories(table: Mapping[str, list[str]]) -> Mapping[str, Category]:
    """Freeze a name -> words table into a read-only category mapping."""
    if not table:
        raise ValueError("At least one category is required")

    categories = {}
    for name, words in table.items():
        if not isinstance(words, (list, tuple)):
            raise ValueError(f"Words for category {name!r} must be a list")
        categories[str(name)] = Category(
            name=str(name),
            words=tuple(str(w) for w in words),
        )
    return MappingProxyType(categories)


# All available categories
CATEGORIES = build_categories({
    "🦁 Animals": [
        "Lion", "Elephant", "Penguin", "Dolphin", "Eagle",
        "Tiger", "Giraffe", "Zebra", "Kangaroo", "Panda",
    ],
    "🍎 Fruits": [
        "Apple", "Banana", "Orange", "Strawberry", "Grape",
        "Watermelon", "Pineapple", "Mango", "Kiwi", "Blueberry",
    ],
    "🌍 Countries": [
        "France", "Japan", "Brazil", "Australia", "Mexico",
        "Canada", "India", "Egypt", "Italy", "Germany",
    ],
    "🍕 Food": [
        "Pizza", "Burger", "Sushi", "Taco", "Pasta",
        "Salad", "Sandwich", "Steak", "Soup", "Donut",
    ],
    "⚽ Sports": [
        "Football", "Basketball", "Tennis", "Baseball", "Hockey",
        "Volleyball", "Swimming", "Golf", "Boxing", "Cricket",
    ],
})


def get_category(
    name: str,
    categories: Mapping[str, Category] = CATEGORIES,
) -> Category:
    """Get a category by name."""
    if name not in categories:
        raise ValueError(f"Unknown category: {name}. Available: {list(categories.keys())}")
    return categories[name]


def load_categories(path: Union[str, Path]) -> Mapping[str, Category]:
    """Load a category table from a YAML file.

    The file is either a plain ``name: [words]`` mapping or has that mapping
    under a top-level ``categories`` key.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Category file {path} must contain a mapping")
    table = data.get("categories", data)
    if not isinstance(table, dict):
        raise ValueError(f"'categories' in {path} must be a mapping")
    return build_categories(table)
