import pytest
from catalogue.source import InMemoryCatalog


def _fresh(i):
    return {
        "id": f"fresh-{i:02d}",
        "name": f"Fresh No. {i:02d}",
        "category": "Fresh",
        "brand": "Acqua" if i % 2 == 0 else "Citrus & Co",
        "fullBottlePrice": 300000 + i * 10000,
        "createdAt": 1000 + i,
        "soldCount": (i * 7) % 23,
        "rating": 3 + (i % 3),
        "hasDecant": i % 2 == 0,
        "hasFullBottle": True,
        "featured": i < 3,
        "searchKeywords": ["fresh", "citrus"] if i % 3 == 0 else ["fresh"],
    }


def _woody(i):
    return {
        "id": f"woody-{i:02d}",
        "name": f"Woody No. {i:02d}",
        "category": "Woody",
        "brand": "Oud House",
        "fullBottlePrice": 900000 + i * 50000,
        "createdAt": 2000 + i,
        "soldCount": i,
        "rating": 4,
        "hasDecant": True,
        "hasFullBottle": True,
        "featured": False,
        "searchKeywords": ["woody", "oud"],
    }


@pytest.fixture()
def products():
    """17 Fresh products, 6 Woody products and one unpriced sample."""
    docs = [_fresh(i) for i in range(17)] + [_woody(i) for i in range(6)]
    docs.append(
        {
            "id": "sample-00",
            "name": "Unpriced Sample",
            "category": "Fresh",
            "brand": "Acqua",
            "createdAt": 5000,
            "searchKeywords": ["fresh"],
        }
    )
    return docs


@pytest.fixture()
def catalog(products):
    return InMemoryCatalog(products)
