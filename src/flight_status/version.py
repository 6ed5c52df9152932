"""Version information for the flight status service."""

from importlib import metadata


def get_version() -> str:
    """Get the current version of the application.

    Returns:
        str: Version string from package metadata, or fallback value
    """
    try:
        return metadata.version("flight-status-service")
    except metadata.PackageNotFoundError:
        # Not installed (running from a source checkout)
        return "0.1.0-dev"
