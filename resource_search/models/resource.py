"""
Resource model: one entry of the curated directory.

Used by every search and recommendation stage instead of raw dicts.
Built from dataset/API dicts via Resource.model_validate(d); camelCase keys
from the JSON data file (pricingModel, dateAdded, ...) are accepted as aliases.
"""

from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..errors import InvalidArgumentError


class Resource(BaseModel):
    """
    Resource payload shared across the search and recommendation stages.

    Only id is strictly required; the remaining fields default to empty so
    partially populated records from the data file still load.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    title: str = ""
    description: str = ""
    url: str = ""
    category: str = ""
    tags: List[str] = Field(default_factory=list)
    technology: List[str] = Field(default_factory=list)
    pricing_model: str = Field(default="", alias="pricingModel")
    difficulty: str = ""
    benefits: List[str] = Field(default_factory=list)
    popularity: float = 0.0
    date_added: Optional[str] = Field(default=None, alias="dateAdded")
    last_updated: Optional[str] = Field(default=None, alias="lastUpdated")
    alternatives: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def drop_self_alternative(self):
        if self.id in self.alternatives:
            self.alternatives = [a for a in self.alternatives if a != self.id]
        return self

    @property
    def tag_set(self) -> FrozenSet[str]:
        return frozenset(self.tags)

    @property
    def technology_set(self) -> FrozenSet[str]:
        return frozenset(self.technology)


def ensure_resources(
    items: Iterable[Union[Dict[str, Any], "Resource"]],
) -> Tuple["Resource", ...]:
    """Convert dicts or Resources to an immutable tuple of Resource models."""
    return tuple(
        Resource.model_validate(r) if isinstance(r, dict) else r
        for r in items
    )


def check_unique_ids(resources: Sequence["Resource"]) -> None:
    """Raise InvalidArgumentError if two resources share an id."""
    seen = set()
    for resource in resources:
        if resource.id in seen:
            raise InvalidArgumentError(f"Duplicate resource id: {resource.id}")
        seen.add(resource.id)


def find_resource(resources: Sequence["Resource"], resource_id: str) -> Optional["Resource"]:
    """Return the resource with this id, or None."""
    for resource in resources:
        if resource.id == resource_id:
            return resource
    return None
