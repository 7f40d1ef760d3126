"""Version information for shadow-clone-jutsu."""

__version__ = "0.1.0"
