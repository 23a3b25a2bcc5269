"""Ensemble.

Additive ensembles of decision trees: the score of a feature vector is the sum
of the leaf votes of every tree.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Any, Iterable, Iterator, List, Mapping, Tuple

import numpy as np
import numpy.typing as npt
import pandas as pd
from pydantic import ValidationError

from boosted_forest.core._exceptions import DataError, FormatError
from boosted_forest.core._json import dumps, loads
from boosted_forest.features import FeatureConfig
from boosted_forest.tree import Dtype, FeatureVector, TreeNode
from boosted_forest.tree import evaluate_tree, scale_tree, from_document, to_document
from ._types import EnsembleDocument


logger = logging.getLogger(__name__)


def predict(trees: Iterable[TreeNode], vector: FeatureVector) -> float:
    """Sum the votes of ``trees`` for ``vector``, in order. Empty sums to 0.0."""
    f = 0.0
    for tree in trees:
        f += evaluate_tree(tree, vector)
    return f


def predict_with_trace(
    trees: Iterable[TreeNode], vector: FeatureVector
) -> Tuple[float, List[float]]:
    """Score ``vector`` and record the running sum after each tree.

    Returns:
        Tuple of (score, partial_sums). ``partial_sums`` has one entry per tree
        in order, and its last entry equals ``score``.
    """
    f = 0.0
    score: List[float] = []
    for tree in trees:
        f += evaluate_tree(tree, vector)
        score.append(f)
    return f, score


@dataclass(slots=True)
class Ensemble:
    """A gradient-boosted model: trees and the features they split on.

    Args:
        features: Naming of the features the trees' indices refer to.
        trees: Trees in boosting order.
    """

    features: FeatureConfig = field(
        metadata={"description": "Feature names in index order."}
    )
    trees: List[TreeNode] = field(
        default_factory=list, metadata={"description": "Trees in boosting order."}
    )

    def add(self, tree: TreeNode) -> None:
        """Append a tree to the ensemble."""
        self.trees.append(tree)

    def scale(self, weight: float) -> None:
        """Scale the votes of every tree in place, e.g. to apply shrinkage."""
        logger.info(f"Scaling {len(self.trees)} trees by {weight}")
        for tree in self.trees:
            scale_tree(tree, weight)

    def predict(self, vector: FeatureVector) -> float:
        """Score a single feature vector."""
        return predict(self.trees, vector)

    def predict_with_trace(self, vector: FeatureVector) -> Tuple[float, List[float]]:
        """Score a single feature vector, with per-tree partial sums."""
        return predict_with_trace(self.trees, vector)

    def predict_batch(self, X: npt.ArrayLike) -> npt.NDArray[np.float64]:
        """Score every row of a 2-D matrix.

        Args:
            X: Matrix with one row per sample and one column per feature, in
                feature index order.

        Returns:
            Scores, one per row.

        Raises:
            DataError: If ``X`` is not 2-D or has fewer columns than features.
        """
        X = np.asarray(X)
        if X.ndim != 2:
            raise DataError(f"X must be 2-dimensional, got {X.ndim} dimensions")
        if X.shape[1] < len(self.features):
            raise DataError(
                f"X has {X.shape[1]} columns but the ensemble uses "
                f"{len(self.features)} features"
            )
        scores = np.empty(X.shape[0], dtype=np.float64)
        for i, row in enumerate(X):
            scores[i] = predict(self.trees, row)
        return scores

    def predict_frame(self, df: pd.DataFrame) -> pd.Series:
        """Score every row of a DataFrame whose columns are named by feature.

        Columns are reordered to feature index order. Extra columns are
        ignored.

        Raises:
            DataError: If a feature has no matching column or more than one.
        """
        columns = list(self.features.features)
        missing = [c for c in columns if c not in df.columns]
        if missing:
            raise DataError(f"DataFrame is missing feature columns: {missing}")
        duplicated = sorted(
            {c for c in df.columns[df.columns.duplicated()] if c in self.features}
        )
        if duplicated:
            raise DataError(f"DataFrame has duplicated feature columns: {duplicated}")
        scores = self.predict_batch(df.loc[:, columns].to_numpy())
        return pd.Series(scores, index=df.index, name="score")

    def to_document(self) -> EnsembleDocument:
        """Convert the ensemble to a JSON document."""
        return {
            "features": list(self.features.features),
            "trees": [to_document(tree, self.features) for tree in self.trees],
        }

    @classmethod
    def from_document(
        cls, document: Mapping[str, Any], dtype: Dtype = float
    ) -> Ensemble:
        """Build an ensemble from a JSON document.

        Raises:
            FormatError: If ``features`` or ``trees`` is missing or malformed,
                or a tree document is malformed.
            UnresolvedFeatureError: If a tree splits on a feature not listed in
                ``features``.
        """
        if not isinstance(document, Mapping):
            raise FormatError(
                f"Ensemble document must be an object, got {type(document).__name__}"
            )
        try:
            names = document["features"]
            tree_docs = document["trees"]
        except KeyError as e:
            raise FormatError(f"Ensemble document is missing field {e}") from e
        if not isinstance(tree_docs, list):
            raise FormatError("Field 'trees' must be a list")

        try:
            features = FeatureConfig(features=names)
        except ValidationError as e:
            raise FormatError(f"Invalid feature list: {e}") from e

        trees = [from_document(doc, features, dtype) for doc in tree_docs]
        logger.debug(f"Decoded {len(trees)} trees over {len(features)} features")
        return cls(features=features, trees=trees)

    def dumps(self) -> bytes:
        """Serialize the ensemble to JSON bytes."""
        return dumps(self.to_document())

    @classmethod
    def loads(cls, data: bytes | str, dtype: Dtype = float) -> Ensemble:
        """Parse JSON bytes produced by :meth:`dumps`."""
        return cls.from_document(loads(data), dtype)  # type: ignore[arg-type]

    def save(self, path: str | PathLike[str]) -> Path:
        """Write the ensemble as JSON to ``path``.

        Returns:
            The path written to.
        """
        path = Path(path)
        if path.is_dir():
            raise ValueError("Please provide a file path, not a directory.")
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("wb") as f:
            f.write(self.dumps())
        logger.debug(f"Saved ensemble of {len(self.trees)} trees to {path}")
        return path

    @classmethod
    def load(cls, path: str | PathLike[str], dtype: Dtype = float) -> Ensemble:
        """Load an ensemble saved with :meth:`save`."""
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"Ensemble file not found: {path}")
        inst = cls.loads(path.read_bytes(), dtype)
        logger.info(f"Loaded ensemble of {len(inst.trees)} trees from {path}")
        return inst

    def __len__(self) -> int:
        return len(self.trees)

    def __iter__(self) -> Iterator[TreeNode]:
        return iter(self.trees)

    def __repr__(self) -> str:
        return f"Ensemble(trees={len(self.trees)}, features={len(self.features)})"
