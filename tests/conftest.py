"""Shared fixtures."""

from typing import Any, Dict

import pytest

from boosted_forest.features import FeatureConfig
from boosted_forest.tree import DecisionNode, LeafNode


@pytest.fixture
def features() -> FeatureConfig:
    return FeatureConfig(features=["x", "y", "z"])


@pytest.fixture
def x_document() -> Dict[str, Any]:
    """Split on x at 5: 1.0 on the left, 2.0 on the right."""
    return {
        "feature": "x",
        "value": 5,
        "vote": 0.0,
        "left": {"vote": 1.0},
        "right": {"vote": 2.0},
    }


@pytest.fixture
def x_tree() -> DecisionNode:
    return DecisionNode(
        feature_index=0,
        threshold=5.0,
        left=LeafNode(vote=1.0),
        right=LeafNode(vote=2.0),
    )


@pytest.fixture
def deep_tree() -> DecisionNode:
    """Two levels: x <= 0 then y <= 10 on the left, z <= -1.5 on the right."""
    return DecisionNode(
        feature_index=0,
        threshold=0.0,
        vote=0.25,
        left=DecisionNode(
            feature_index=1,
            threshold=10.0,
            vote=-0.5,
            left=LeafNode(vote=-1.0),
            right=LeafNode(vote=3.0),
        ),
        right=DecisionNode(
            feature_index=2,
            threshold=-1.5,
            vote=0.75,
            left=LeafNode(vote=0.125),
            right=LeafNode(vote=4.5),
        ),
    )
