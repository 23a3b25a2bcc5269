"""Boosted Forest.

Inference-time representation of gradient-boosted decision tree ensembles:
routing feature vectors to leaf votes, shrinking votes, and loading/saving
trees as JSON documents keyed by feature name.
"""

from importlib.metadata import PackageNotFoundError, version as _pkg_version
from pathlib import Path


def _detect_version() -> str:
    """Return the installed distribution version, with a dev fallback.

    First tries importlib.metadata for the installed wheel/sdist. If that fails
    (e.g., running directly from a source checkout without installation), it
    reads the static ``[project].version`` from ``pyproject.toml`` at the
    repository root. As a last resort, returns a sentinel version string.
    """
    distribution_name = "boosted-forest"

    try:
        return _pkg_version(distribution_name)
    except PackageNotFoundError:
        pass

    pyproject_path = Path(__file__).resolve().parent.parent / "pyproject.toml"
    if pyproject_path.is_file():
        import tomllib

        try:
            data = tomllib.loads(pyproject_path.read_text(encoding="utf-8"))
        except (OSError, tomllib.TOMLDecodeError):
            data = {}
        project_version = data.get("project", {}).get("version")
        if isinstance(project_version, str) and project_version:
            return project_version

    return "0.0.0+unknown"


__version__: str = _detect_version()

__all__ = ["__version__"]
