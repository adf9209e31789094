"""skudump command line interface."""

from skudump import __version__

__all__ = ["__version__"]
