from __future__ import annotations

from typing import List, TypedDict

from boosted_forest.tree import TreeDocument


class EnsembleDocument(TypedDict):
    features: List[str]
    trees: List[TreeDocument]
