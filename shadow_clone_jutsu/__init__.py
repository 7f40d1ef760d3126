"""
shadow-clone-jutsu - parallel development with git worktrees and tmux
"""

from .__version__ import __version__
from .core import ShadowClone

__all__ = ["ShadowClone", "__version__"]
