# Auth module for the Linkp Platform
# Provides session-token authentication and profile resolution dependencies

from auth.dependencies import (
    TokenData,
    create_access_token,
    decode_access_token,
    get_current_user,
)

from auth.decorators import (
    AuthError,
    get_current_business,
    get_current_creator,
)

__all__ = [
    # Tokens
    "TokenData",
    "create_access_token",
    "decode_access_token",
    "get_current_user",

    # Profiles
    "AuthError",
    "get_current_business",
    "get_current_creator",
]
