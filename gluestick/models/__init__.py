from gluestick.models.paste import Paste, Visibility
from gluestick.models.user import User

__all__ = [
    "Paste",
    "Visibility",
    "User",
]
