"""Backing logic: loaders for resources and recommendation config."""

from .resource_loader import ResourceLoader, load_recommendation_config

__all__ = [
    "ResourceLoader",
    "load_recommendation_config",
]
