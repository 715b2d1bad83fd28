"""
Sample datasets for the JSON vs TOON comparisons.

Each factory builds a fresh payload on every call, so callers own what
they get and nothing is shared between comparisons.
"""
import random
from dataclasses import dataclass
from typing import Any, Callable, Dict, List

DEFAULT_SEED = 42

ORDER_STATUSES = ("pending", "completed", "shipped")

LLM_TEST_PROMPT = (
    "You are a helpful assistant. Analyze the product data below and list all products that are:\n"
    'In the "Electronics" category and is less than $50. \n'
    "Format your response as a simple list."
)


@dataclass(frozen=True)
class Dataset:
    """A named payload to render in every format."""
    key: str
    name: str
    data: Any


def demo_users() -> Dict[str, Any]:
    return {
        "users": [
            {"id": 1, "name": "Alice", "role": "admin", "active": True},
            {"id": 2, "name": "Bob", "role": "user", "active": True},
            {"id": 3, "name": "Charlie", "role": "moderator", "active": False},
        ],
        "metadata": {
            "total": 3,
            "lastUpdated": "2025-01-15T10:00:00Z",
        },
    }


def small_users() -> Dict[str, Any]:
    return {
        "users": [
            {"id": 1, "name": "Alice", "role": "admin", "lastLogin": "2025-01-15T10:30:00Z"},
            {"id": 2, "name": "Bob", "role": "user", "lastLogin": "2025-01-14T15:22:00Z"},
            {"id": 3, "name": "Charlie", "role": "user", "lastLogin": "2025-01-13T09:45:00Z"},
            {"id": 4, "name": "Diana", "role": "moderator", "lastLogin": "2025-01-12T11:00:00Z"},
            {"id": 5, "name": "Eve", "role": "user", "lastLogin": "2025-01-11T08:30:00Z"},
        ]
    }


def medium_products() -> Dict[str, Any]:
    return {
        "products": [
            {"id": 1, "name": "Widget", "price": 9.99, "category": "tools", "inStock": True},
            {"id": 2, "name": "Gadget", "price": 14.50, "category": "tools", "inStock": True},
            {"id": 3, "name": "Book: Advanced Python", "price": 29.99, "category": "books", "inStock": False},
            {"id": 4, "name": "Notebook", "price": 5.99, "category": "stationery", "inStock": True},
            {"id": 5, "name": "Pen Set", "price": 12.99, "category": "stationery", "inStock": True},
            {"id": 6, "name": "Coffee Mug", "price": 8.50, "category": "lifestyle", "inStock": True},
            {"id": 7, "name": 'Monitor 24"', "price": 199.99, "category": "electronics", "inStock": True},
            {"id": 8, "name": "USB Cable", "price": 4.99, "category": "electronics", "inStock": True},
            {"id": 9, "name": "T-Shirt", "price": 19.99, "category": "clothing", "inStock": True},
            {"id": 10, "name": "Sneakers", "price": 79.99, "category": "clothing", "inStock": False},
        ]
    }


def large_orders(count: int = 20, seed: int = DEFAULT_SEED) -> Dict[str, Any]:
    """
    Generate a reproducible order list.

    Args:
        count: Number of orders
        seed: Seed for the private random generator

    Returns:
        {"orders": [...]} with `count` uniform order records
    """
    rng = random.Random(seed)
    orders = []
    for i in range(count):
        orders.append({
            "id": i + 1,
            "customerId": (i % 5) + 1,
            "productId": (i % 10) + 1,
            "quantity": rng.randint(1, 5),
            "price": round(rng.uniform(10, 110), 2),
            "date": f"2025-01-{rng.randint(1, 28):02d}T{rng.randint(0, 23):02d}:00:00Z",
            "status": rng.choice(ORDER_STATUSES),
        })
    return {"orders": orders}


def llm_products() -> Dict[str, Any]:
    return {
        "products": [
            {"id": 1, "name": "Wireless Mouse", "price": 29.99, "category": "Electronics", "inStock": True},
            {"id": 2, "name": "Mechanical Keyboard", "price": 89.99, "category": "Electronics", "inStock": True},
            {"id": 3, "name": "USB-C Hub", "price": 45.00, "category": "Electronics", "inStock": False},
            {"id": 4, "name": "Monitor Stand", "price": 39.99, "category": "Office", "inStock": True},
            {"id": 5, "name": "Desk Lamp", "price": 24.99, "category": "Office", "inStock": True},
            {"id": 6, "name": "Ergonomic Chair", "price": 249.99, "category": "Furniture", "inStock": True},
            {"id": 7, "name": "Standing Desk", "price": 499.99, "category": "Furniture", "inStock": False},
            {"id": 8, "name": "Cable Management", "price": 12.99, "category": "Office", "inStock": True},
        ]
    }


_FACTORIES: Dict[str, Callable[[int], Dataset]] = {
    "demo": lambda seed: Dataset("demo", "Demo Users", demo_users()),
    "users": lambda seed: Dataset("users", "Small User Dataset (5 users)", small_users()),
    "products": lambda seed: Dataset("products", "Medium Product Dataset (10 products)", medium_products()),
    "orders": lambda seed: Dataset("orders", "Large Order Dataset (20 orders)", large_orders(seed=seed)),
    "llm": lambda seed: Dataset("llm", "LLM Product Dataset (8 products)", llm_products()),
}

DATASET_KEYS = tuple(_FACTORIES)


def get_dataset(key: str, seed: int = DEFAULT_SEED) -> Dataset:
    """
    Build a dataset by key.

    Raises:
        KeyError: If `key` is not one of DATASET_KEYS
    """
    try:
        factory = _FACTORIES[key]
    except KeyError:
        raise KeyError(f"Unknown dataset {key!r}; choose from {', '.join(DATASET_KEYS)}") from None
    return factory(seed)


COMPARISON_KEYS = ("users", "products", "orders")


def comparison_datasets(seed: int = DEFAULT_SEED) -> List[Dataset]:
    """The datasets used by the comparison run, smallest first."""
    return [get_dataset(key, seed) for key in COMPARISON_KEYS]
