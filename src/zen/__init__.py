from .constants import ZEN_VERSION as __version__

__all__ = ["__version__"]
