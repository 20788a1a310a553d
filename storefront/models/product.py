# storefront/models/product.py

"""Product and category records as returned by the catalogue API."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Category:
    """Category a product belongs to."""

    id: int
    name: str
    image: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Category":
        """Build a Category from its JSON object.

        Raises:
            KeyError, TypeError, ValueError, OverflowError: when required
            fields are missing or have the wrong type.
        """
        name = data["name"]
        if not isinstance(name, str):
            raise TypeError(f"category name must be a string, got {name!r}")
        return cls(
            id=int(data["id"]),
            name=name,
            image=str(data.get("image") or ""),
        )


@dataclass(frozen=True)
class Product:
    """A single catalogue entry, immutable once received."""

    id: int
    title: str
    price: float
    description: str
    category: Category
    images: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Product":
        """Build a Product from its JSON object.

        Raises:
            KeyError, TypeError, ValueError, OverflowError: when required
            fields are missing or have the wrong type.
        """
        if not isinstance(data, dict):
            raise TypeError(f"product must be an object, got {type(data).__name__}")
        title = data["title"]
        description = data["description"]
        if not isinstance(title, str) or not isinstance(description, str):
            raise TypeError("product title and description must be strings")
        price = data["price"]
        if isinstance(price, bool) or not isinstance(price, (int, float)):
            raise TypeError(f"product price must be numeric, got {price!r}")
        category = data["category"]
        if not isinstance(category, dict):
            raise TypeError("product category must be an object")
        return cls(
            id=int(data["id"]),
            title=title,
            price=float(price),
            description=description,
            category=Category.from_dict(category),
            images=tuple(str(url) for url in data.get("images") or ()),
        )
