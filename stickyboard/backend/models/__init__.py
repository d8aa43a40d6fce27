# Importing the models registers their tables on Base.metadata
from stickyboard.backend.models.base import Base
from stickyboard.backend.models.sticky import Sticky

__all__ = ["Base", "Sticky"]
