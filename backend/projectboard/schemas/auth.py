from pydantic import BaseModel, Field

class LoginIn(BaseModel):
    login: str = Field(..., min_length=1, max_length=64)
    password: str

class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int

class UserOut(BaseModel):
    id: int
    login: str
    full_name: str | None = None
    role: str
    is_admin: bool = False
    locale: str
