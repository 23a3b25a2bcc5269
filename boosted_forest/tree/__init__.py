"""Binary decision trees: evaluation, vote scaling and JSON documents."""

from ._nodes import DecisionNode, LeafNode, TreeNode, evaluate_tree, scale_tree
from ._codec import from_document, to_document, loads_tree, dumps_tree
from ._types import (
    Dtype,
    FeatureVector,
    LeafDocument,
    DecisionDocument,
    TreeDocument,
    LEAF_INDEX,
)

__all__ = [
    "DecisionNode",
    "LeafNode",
    "TreeNode",
    "evaluate_tree",
    "scale_tree",
    "from_document",
    "to_document",
    "loads_tree",
    "dumps_tree",
    "Dtype",
    "FeatureVector",
    "LeafDocument",
    "DecisionDocument",
    "TreeDocument",
    "LEAF_INDEX",
]
