from typing import Annotated
from pydantic import BaseModel, EmailStr, Field, StringConstraints

NameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)]

class UserRegister(BaseModel):
    first_name: NameStr
    last_name: NameStr
    email: EmailStr
    # bcrypt only looks at the first 72 bytes
    password: Annotated[str, Field(min_length=1, max_length=72)]

class UserLogin(BaseModel):
    email: EmailStr
    password: Annotated[str, Field(min_length=1, max_length=256)]

class UserSummary(BaseModel):
    id: int
    email: str
    confirmed: bool
    model_config = {"from_attributes": True}

class Registered(BaseModel):
    message: str
    email_sent: bool

class LoginResult(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserSummary

class ClaimRead(BaseModel):
    id: int
    confirmed: bool
