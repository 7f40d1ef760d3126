"""Core functionality for shadow-clone-jutsu"""

from .shadow_clone import ShadowClone

__all__ = ["ShadowClone"]
