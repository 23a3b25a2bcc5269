"""Decision tree nodes.

A tree is a closed union of two node kinds: :class:`DecisionNode`, which
routes a feature vector to one of exactly two children, and
:class:`LeafNode`, which holds the vote returned for vectors that reach it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, TypeAlias, Union

from ._types import FeatureVector


@dataclass(slots=True)
class LeafNode:
    """A terminal node of a tree."""

    vote: float = field(metadata={"description": "The vote returned at this leaf."})

    def __post_init__(self) -> None:
        self.vote = float(self.vote)

    @property
    def is_leaf(self) -> bool:
        return True

    def eval(self, vector: FeatureVector) -> float:
        """Return the leaf vote, whatever the vector holds."""
        return self.vote

    def scale(self, weight: float) -> None:
        """Multiply the vote by ``weight`` in place."""
        self.vote *= weight


@dataclass(slots=True)
class DecisionNode:
    """A split on one feature.

    Vectors whose value at ``feature_index`` is less than or equal to
    ``threshold`` go left, all others go right. The node's own ``vote`` is
    scaled and serialized with the tree but never contributes to
    :meth:`eval`.
    """

    feature_index: int = field(
        metadata={"description": "Index of the feature compared at this node."}
    )
    threshold: Any = field(
        metadata={"description": "Split value, in the tree's element type."}
    )
    left: TreeNode = field(
        metadata={"description": "Subtree for values <= threshold."}
    )
    right: TreeNode = field(
        metadata={"description": "Subtree for values > threshold."}
    )
    vote: float = field(
        default=0.0, metadata={"description": "The node's own vote."}
    )

    def __post_init__(self) -> None:
        if self.feature_index < 0:
            raise ValueError(f"feature_index must be >= 0, got {self.feature_index}")
        self.vote = float(self.vote)

    @property
    def is_leaf(self) -> bool:
        return False

    def eval(self, vector: FeatureVector) -> float:
        """Route ``vector`` down the tree and return the vote of the leaf reached."""
        return evaluate_tree(self, vector)

    def scale(self, weight: float) -> None:
        """Multiply every vote in this subtree by ``weight`` in place."""
        scale_tree(self, weight)


TreeNode: TypeAlias = Union[DecisionNode, LeafNode]


def evaluate_tree(node: TreeNode, vector: FeatureVector) -> float:
    """Return the vote of the leaf ``vector`` is routed to.

    ``vector`` must be long enough for every feature index in the tree. Python
    containers raise ``IndexError`` otherwise; no further check is made.
    """
    while True:
        match node:
            case LeafNode(vote=vote):
                return vote
            case DecisionNode(feature_index=fid, threshold=fv, left=left, right=right):
                node = left if vector[fid] <= fv else right
            case _:
                raise TypeError(f"Not a tree node: {type(node).__name__}")


def scale_tree(node: TreeNode, weight: float) -> None:
    """Multiply the vote of every node under ``node`` by ``weight``.

    Decision node votes are scaled too. NaN and infinite weights are applied
    as is.
    """
    stack: List[TreeNode] = [node]
    while stack:
        n = stack.pop()
        match n:
            case LeafNode():
                n.vote *= weight
            case DecisionNode(left=left, right=right):
                n.vote *= weight
                stack.append(right)
                stack.append(left)
            case _:
                raise TypeError(f"Not a tree node: {type(n).__name__}")
