from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserCreate(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    address: str = Field(min_length=1)
    answer: str = Field(min_length=1)


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class ForgotPasswordRequest(BaseModel):
    email: EmailStr
    answer: str = Field(min_length=1)
    new_password: str = Field(min_length=1)


class ProfileUpdate(BaseModel):
    name: Optional[str] = None
    password: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    phone: str
    address: str
    role: int


class LoginResponse(BaseModel):
    success: bool = True
    message: str = "Login Successful"
    user: UserResponse
    token: str
    token_type: str = "bearer"


class ProfileResponse(BaseModel):
    success: bool = True
    message: str = "Profile Updated Successfully"
    updated_user: UserResponse


class MessageResponse(BaseModel):
    success: bool = True
    message: str
