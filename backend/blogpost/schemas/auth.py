from pydantic import BaseModel

from blogpost.schemas.user import UserOut

class LoginIn(BaseModel):
    email: str
    password: str

class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut
