from __future__ import annotations

from typing import Any, Dict, Protocol, Tuple, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator


@runtime_checkable
class FeatureNaming(Protocol):
    """Naming authority consumed by the tree document codec.

    Implementations must be consistent between encoding and decoding: the same
    name always maps to the same index and back.
    """

    def get_feature_index(self, name: str) -> int:
        """Return the index of ``name``, or a negative number if unknown."""
        ...

    def get_feature_name(self, index: int) -> str:
        """Return the name of the feature at ``index``."""
        ...


class FeatureConfig(BaseModel):
    """Ordered feature names. A feature's position is its index.

    Examples:
        .. code-block:: python

            cfg = FeatureConfig(features=["age", "income"])
            cfg.get_feature_index("income")   # 1
            cfg.get_feature_index("missing")  # -1
            cfg.get_feature_name(0)           # "age"
    """

    model_config = ConfigDict(frozen=True)

    features: Tuple[str, ...] = Field(
        default=(), description="Feature names in index order."
    )

    _index: Dict[str, int] = PrivateAttr(default_factory=dict)

    @field_validator("features")
    @classmethod
    def _check_unique(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        duplicates = sorted({name for name in v if v.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate feature names: {duplicates}")
        return v

    def model_post_init(self, __context: Any) -> None:
        self._index = {name: i for i, name in enumerate(self.features)}

    def get_feature_index(self, name: str) -> int:
        """Return the index of ``name``, or ``-1`` if it is not configured."""
        return self._index.get(name, -1)

    def get_feature_name(self, index: int) -> str:
        """Return the name of the feature at ``index``.

        Raises:
            IndexError: If ``index`` is outside ``[0, len(self))``.
        """
        if not 0 <= index < len(self.features):
            raise IndexError(
                f"Feature index {index} out of range for {len(self.features)} features"
            )
        return self.features[index]

    def __len__(self) -> int:
        return len(self.features)

    def __contains__(self, name: object) -> bool:
        return name in self._index
