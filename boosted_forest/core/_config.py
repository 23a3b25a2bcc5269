from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class Settings(BaseSettings):
    """Class to store all the settings of the package.

    Every field can be set through an environment variable (or ``.env`` entry)
    prefixed with ``BOOSTED_FOREST_``.
    """

    WARN_INDEX_DRIFT: bool = True
    """Log a warning when a decision document's ``index`` disagrees with the
    index resolved from its ``feature`` name."""

    PRETTY_JSON: bool = False
    """Indent JSON emitted by the ``dumps``/``save`` helpers."""

    model_config = SettingsConfigDict(
        env_prefix="BOOSTED_FOREST_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
