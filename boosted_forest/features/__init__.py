"""Mapping between feature names and the integer indices trees route on."""

from ._features import FeatureConfig, FeatureNaming

__all__ = ["FeatureConfig", "FeatureNaming"]
