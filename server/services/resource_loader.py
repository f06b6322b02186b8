"""
Resource Loader

Loads the resource collection from a JSON file. The file holds either a list
of resources or an object with a "resources" list.

Usage:
    loader = ResourceLoader(path)
    resources = loader.load()
    print(f"Loaded {len(resources)} resources")
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from resource_search.errors import InvalidArgumentError
from resource_search.models import (
    RecommendationConfig,
    Resource,
    check_unique_ids,
    ensure_resources,
)

logger = logging.getLogger(__name__)


class ResourceLoader:
    """Reads resources.json into an immutable snapshot of Resource models."""

    def __init__(self, path: Union[Path, str]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_items(self) -> List[Dict[str, Any]]:
        with open(self._path) as f:
            data = json.load(f)
        items = data.get("resources", []) if isinstance(data, dict) else data
        if not isinstance(items, list):
            raise InvalidArgumentError(f"Expected a list of resources in {self._path}")
        return items

    def load(self) -> Tuple[Resource, ...]:
        """
        Load and validate every resource.

        Raises:
            FileNotFoundError: the file does not exist.
            json.JSONDecodeError: the file is not JSON.
            InvalidArgumentError: wrong shape or duplicate ids.
            pydantic.ValidationError: a resource is malformed.
        """
        resources = ensure_resources(self._read_items())
        check_unique_ids(resources)
        logger.info("Loaded %d resources from %s", len(resources), self._path)
        return resources


def load_recommendation_config(path: Optional[Union[Path, str]]) -> RecommendationConfig:
    """RecommendationConfig from a JSON file, or defaults when path is None."""
    if path is None:
        return RecommendationConfig()
    with open(path) as f:
        data = json.load(f)
    config = RecommendationConfig.from_dict(data)
    logger.info("Loaded recommendation config from %s", path)
    return config
