from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from invoicer.models.user import Role


# Fields are optional so missing values get the API's own 400 message.
# Emails are kept exactly as sent: no normalization, no format check.
class RegisterSchema(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None

class LoginSchema(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None

class SetupAdminSchema(BaseModel):
    email: Optional[str] = None

class RoleUpdateSchema(BaseModel):
    role: Optional[str] = None

class RegisterResponse(BaseModel):
    message: str
    isAdmin: bool

class LoginUser(BaseModel):
    id: str
    name: Optional[str] = None
    email: str
    role: Role

class TokenResponse(BaseModel):
    token: str
    user: LoginUser

class UserOut(BaseModel):
    id: str
    name: Optional[str] = None
    email: str
    role: Role
    imagePath: Optional[str] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
