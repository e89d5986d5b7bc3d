from .ad import authenticate
from .backend import AuthResult

__all__ = ["authenticate", "AuthResult"]
