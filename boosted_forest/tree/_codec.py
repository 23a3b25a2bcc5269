"""Conversion between trees and JSON documents.

Documents reference features by name. The naming authority passed to
:func:`from_document` and :func:`to_document` maps names to indices and back,
and must do so consistently for a tree to survive a round trip.

Leaf::

    {"index": -1, "vote": 0.5}

Decision::

    {"index": 3, "value": 5, "vote": 0.0, "feature": "age",
     "left": {...}, "right": {...}}

Presence of ``feature`` marks a decision node, and the index is always
re-resolved from it. A disagreeing ``index`` in the document is ignored.
"""

from __future__ import annotations

import logging
import numbers
from typing import Any, Mapping

import numpy as np

from boosted_forest.core._config import settings
from boosted_forest.core._exceptions import FormatError, UnresolvedFeatureError
from boosted_forest.core._json import dumps, loads
from boosted_forest.features import FeatureNaming
from ._nodes import DecisionNode, LeafNode, TreeNode
from ._types import LEAF_INDEX, Dtype, TreeDocument


logger = logging.getLogger(__name__)


def _read_number(document: Mapping[str, Any], key: str) -> numbers.Real:
    if key not in document:
        raise FormatError(f"Tree document is missing required field '{key}'")
    value = document[key]
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
        raise FormatError(
            f"Field '{key}' must be a number, got {type(value).__name__}"
        )
    return value


def _read_child(document: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    if key not in document:
        raise FormatError(f"Decision node document is missing '{key}' subtree")
    child = document[key]
    if not isinstance(child, Mapping):
        raise FormatError(
            f"Subtree '{key}' must be an object, got {type(child).__name__}"
        )
    return child


def _resolve_feature(name: str, features: FeatureNaming) -> int:
    try:
        index = features.get_feature_index(name)
    except KeyError:
        index = -1
    if index < 0:
        raise UnresolvedFeatureError(f"Failed to find {name} in config.")
    return index


def from_document(
    document: Mapping[str, Any],
    features: FeatureNaming,
    dtype: Dtype = float,
) -> TreeNode:
    """Build a tree from a JSON document.

    Args:
        document: The parsed tree document.
        features: Naming authority resolving ``feature`` names to indices.
        dtype: Element type thresholds are converted to, e.g., ``float``,
            ``int`` or ``numpy.float32``.

    Returns:
        The root of the decoded tree.

    Raises:
        FormatError: If a node misses ``vote``, a decision node misses
            ``value``, ``left`` or ``right``, or a field has the wrong type.
        UnresolvedFeatureError: If a ``feature`` name is unknown to
            ``features``.
    """
    if not isinstance(document, Mapping):
        raise FormatError(
            f"Tree document must be an object, got {type(document).__name__}"
        )

    vote = _read_number(document, "vote")

    if "feature" not in document:
        return LeafNode(vote=vote)

    name = document["feature"]
    if not isinstance(name, str):
        raise FormatError(f"Field 'feature' must be a string, got {type(name).__name__}")
    index = _resolve_feature(name, features)

    declared = document.get("index")
    if settings.WARN_INDEX_DRIFT and declared is not None and declared != index:
        logger.warning(
            f"Document index {declared} for feature '{name}' differs from "
            f"resolved index {index}. Using {index}."
        )

    threshold = dtype(_read_number(document, "value"))
    left = from_document(_read_child(document, "left"), features, dtype)
    right = from_document(_read_child(document, "right"), features, dtype)
    return DecisionNode(
        feature_index=index, threshold=threshold, left=left, right=right, vote=vote
    )


def _feature_name(index: int, features: FeatureNaming) -> str:
    try:
        return features.get_feature_name(index)
    except (IndexError, KeyError) as e:
        raise UnresolvedFeatureError(
            f"No feature name for index {index} in config."
        ) from e


def to_document(node: TreeNode, features: FeatureNaming) -> TreeDocument:
    """Convert a tree to a JSON document.

    Raises:
        UnresolvedFeatureError: If a node's feature index has no name in
            ``features``.
    """
    match node:
        case LeafNode(vote=vote):
            return {"index": LEAF_INDEX, "vote": vote}
        case DecisionNode(
            feature_index=fid, threshold=fv, left=left, right=right, vote=vote
        ):
            return {
                "index": fid,
                "value": fv,
                "left": to_document(left, features),
                "right": to_document(right, features),
                "vote": vote,
                "feature": _feature_name(fid, features),
            }
        case _:
            raise TypeError(f"Not a tree node: {type(node).__name__}")


def loads_tree(
    data: bytes | str, features: FeatureNaming, dtype: Dtype = float
) -> TreeNode:
    """Parse a JSON tree document and decode it with :func:`from_document`."""
    logger.debug(f"Decoding tree from {len(data)} bytes of JSON")
    return from_document(loads(data), features, dtype)  # type: ignore[arg-type]


def dumps_tree(node: TreeNode, features: FeatureNaming) -> bytes:
    """Encode a tree with :func:`to_document` and serialize it to JSON bytes."""
    return dumps(to_document(node, features))
