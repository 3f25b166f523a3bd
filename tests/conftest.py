import pytest

from app.catalog import InMemoryCatalog
from app.models import ProductItem


@pytest.fixture
def items():
    return [
        ProductItem(id=1, name="Amazing Widget", description="A widget that does everything"),
        ProductItem(id=2, name="Cool Kids Scooter", description="Two wheels of fun"),
        ProductItem(id=3, name="Perfect Pillow", description="Sleep like a baby"),
        ProductItem(id=4, name="Puzzle Box", description="Great for Kids"),
        ProductItem(id=5, name="Amazing", description="Our flagship product"),
        ProductItem(id=6, name="Widget", description=""),
    ]


@pytest.fixture
def catalog(items):
    return InMemoryCatalog(items)
