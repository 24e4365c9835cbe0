from .common import ApiResponse, Timestamp, UserIdRequest
from .user import (
    Credentials,
    PasswordReset,
    RegisterResult,
    LoginResult,
    ProfileUpdate,
    Profile,
    TokenPayload,
)
