from __future__ import annotations

from typing import Any, Callable, Literal, Sequence, TypeAlias, TypedDict, Union

import numpy as np
import numpy.typing as npt


FeatureVector: TypeAlias = Union[Sequence[float], npt.NDArray[np.generic]]
"""Any index-addressable container of feature values."""

LEAF_INDEX: Literal[-1] = -1
"""``index`` written for leaves. Decoding never relies on it."""

Dtype: TypeAlias = Callable[[Any], Any]
"""Converter to the tree element type, applied to decoded thresholds."""


class LeafDocument(TypedDict):
    index: int
    vote: float


class DecisionDocument(TypedDict):
    index: int
    value: int | float
    left: TreeDocument
    right: TreeDocument
    vote: float
    feature: str


TreeDocument: TypeAlias = Union[LeafDocument, DecisionDocument]
