from pydantic import BaseModel


class RegisterRequest(BaseModel):
    # Optional at the schema level so missing fields get the same 400 messages
    # as blank ones (see utils.validation).
    name: str | None = None
    email: str | None = None
    password: str | None = None
    role: str | None = None  # parent / helper


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class UserPublic(BaseModel):
    id: int
    name: str
    email: str
    role: str


class AuthResponse(BaseModel):
    token: str
    user: UserPublic
