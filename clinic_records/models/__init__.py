from .visit import Visit
from .user import User

__all__ = ["Visit", "User"]
