"""typeweave version from the installed distribution metadata."""

from importlib.metadata import PackageNotFoundError, version


def get_version() -> str:
    try:
        return version("typeweave")
    except PackageNotFoundError:
        return "0.0.0"
