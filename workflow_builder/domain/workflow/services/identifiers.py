from typing import Callable
from uuid import uuid4

IdFactory = Callable[[], str]


def new_node_id() -> str:
    return str(uuid4())


def sequential_ids(prefix: str = "n") -> IdFactory:
    """Deterministic id factory yielding ``n1``, ``n2``, ... for fixtures and imports."""
    counter = 0

    def factory() -> str:
        nonlocal counter
        counter += 1
        return f"{prefix}{counter}"

    return factory
