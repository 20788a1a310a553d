# storefront/services/presenter.py

"""Display formatting for catalogue products."""

from collections.abc import Iterable

from storefront.models.product import Product


def to_summary(product: Product) -> str:
    """Format a product as the three-line card text shown in the list."""
    return (
        f"{product.title} - {product.price} USD\n"
        f"Categoría: {product.category.name}\n"
        f"{product.description}"
    )


def to_summaries(products: Iterable[Product]) -> list[str]:
    """Format every product, preserving order."""
    return [to_summary(p) for p in products]
