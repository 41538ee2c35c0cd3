"""Local persistence of the store snapshot."""

from .local import LocalStateStorage

__all__ = ["LocalStateStorage"]
