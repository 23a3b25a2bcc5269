"""Additive ensembles of decision trees."""

from ._ensemble import Ensemble, predict, predict_with_trace
from ._types import EnsembleDocument

__all__ = ["Ensemble", "EnsembleDocument", "predict", "predict_with_trace"]
