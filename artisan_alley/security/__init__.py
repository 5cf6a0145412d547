"""
Security module for handling authentication and authorization.
"""
from .jwt import create_access_token, create_refresh_token, decode_token, verify_refresh_token
from .passwords import hash_password, verify_password

__all__ = [
    "create_access_token",
    "create_refresh_token",
    "decode_token",
    "hash_password",
    "verify_password",
    "verify_refresh_token"
]
