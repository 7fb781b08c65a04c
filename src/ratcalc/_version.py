"""Installed version of ratcalc, as recorded in the package metadata."""

from importlib.metadata import PackageNotFoundError, version

_UNKNOWN_VERSION = "0+unknown"


def get_version() -> str:
    """Return the installed distribution version.

    A source checkout that was never installed has no metadata and reports
    ``0+unknown``.
    """
    try:
        return version("ratcalc")
    except PackageNotFoundError:
        return _UNKNOWN_VERSION


__version__ = get_version()
