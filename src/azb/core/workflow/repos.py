"""Azure Repos management: list, create and delete.

Repository deletion goes through ``az repos``, which the mutation
classifier treats as a read. Callers confirm deletion themselves before
calling ``delete_repository``.
"""

import logging
from typing import List

from azb.core.client import BoardsClient
from azb.core.errors import ConfigurationError, RepositoryError
from azb.core.models import Repo

logger = logging.getLogger(__name__)


def sort_repos(repos: List[Repo]) -> List[Repo]:
    """Sort repositories by name, ignoring case."""
    return sorted(repos, key=lambda repo: repo.name.lower())


def list_repositories(client: BoardsClient) -> List[Repo]:
    return sort_repos(client.list_repos())


def find_repository(client: BoardsClient, name_or_id: str) -> Repo:
    """Look up a repository by case-insensitive name or exact ID.

    Raises:
        RepositoryError: If no repository matches
    """
    key = name_or_id.strip()
    for repo in client.list_repos():
        if repo.name.lower() == key.lower() or repo.id == key:
            return repo
    raise RepositoryError(f"repository not found: {key}")


def _require_name(name: str) -> str:
    value = name.strip()
    if not value:
        raise ConfigurationError("repository name required")
    return value


def create_repository(client: BoardsClient, name: str) -> Repo:
    repo = client.create_repo(_require_name(name))
    logger.info("Created repository %s (%s)", repo.name, repo.id)
    return repo


def delete_repository(client: BoardsClient, name_or_id: str) -> Repo:
    """Resolve ``name_or_id`` to a repository ID and delete it.

    Returns:
        The repository that was deleted
    """
    repo = find_repository(client, _require_name(name_or_id))
    client.delete_repo(repo.id)
    logger.info("Deleted repository %s (%s)", repo.name, repo.id)
    return repo
