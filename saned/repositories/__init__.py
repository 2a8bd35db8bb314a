from .matches import MatchRepository
from .users import UserDirectory

__all__ = ["MatchRepository", "UserDirectory"]
