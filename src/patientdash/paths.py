"""streamlines common filesystem paths for the project"""

from pathlib import Path

def config_dir() -> Path:
    """Return the directory searched for ``config.local.yaml`` (``./config``)."""
    return Path.cwd() / "config"
