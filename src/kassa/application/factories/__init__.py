"""Application factories for repository access."""

from kassa.application.factories.repository_factory import RepositoryFactory

__all__ = ["RepositoryFactory"]
