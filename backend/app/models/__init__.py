from .bid import Bid
from .project import Project
from .user import User

__all__ = ["User", "Project", "Bid"]
