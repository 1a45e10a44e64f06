"""Version lookup for the knob_input package."""

from importlib import metadata
from pathlib import Path

PACKAGE_NAME = "knob-input"
FALLBACK_VERSION = "0.0.0"


def get_version() -> str:
    """
    Get version for the package.

    Installed copies report their distribution metadata; a source checkout
    asks setuptools_scm.

    :return: Version number.
    """
    try:
        return metadata.version(PACKAGE_NAME)
    except metadata.PackageNotFoundError:  # dev checkout, not installed
        import setuptools_scm  # type: ignore[import-untyped]

        root = str(Path(__file__).resolve().parents[2])
        return str(
            setuptools_scm.get_version(root=root, fallback_version=FALLBACK_VERSION)
        )


__all__ = ["get_version"]
