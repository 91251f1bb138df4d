"""Domain-Oriented Observability for identity infrastructure."""

from identity.infrastructure.observability.repository_probe import (
    DefaultRepositoryProbe,
    RepositoryProbe,
)

__all__ = [
    "DefaultRepositoryProbe",
    "RepositoryProbe",
]
