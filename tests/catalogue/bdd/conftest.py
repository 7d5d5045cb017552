"""Shared BDD fixtures and step definitions for catalog listings."""

import pytest
from catalogue.source import InMemoryCatalog
from pytest_bdd import given, parsers


@pytest.fixture()
def error():
    """Container for captured errors."""
    return {"exc": None}


def _product(category, i):
    return {
        "id": f"{category.lower()}-{i:02d}",
        "name": f"{category} No. {i:02d}",
        "category": category,
        "fullBottlePrice": 300000 + i * 10000,
        "createdAt": i,
    }


@given(
    parsers.cfparse('a catalog of {first_count:d} "{first}" products and {second_count:d} "{second}" products'),
    target_fixture="catalog",
)
def catalog_of(first_count, first, second_count, second):
    products = [_product(first, i) for i in range(first_count)]
    products += [_product(second, i) for i in range(second_count)]
    return InMemoryCatalog(products)
