"""
PetPal Backend — Account Form Schemas
=======================================

What:  Pydantic models for the registration and login forms.
How:   Web route handlers build these from Form fields; a pydantic
       ValidationError re-renders the form with a readable message.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator


class RegistrationForm(BaseModel):
    username: str = Field(min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(min_length=1)
    confirm_password: str

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Username cannot be blank")
        return v

    @property
    def passwords_match(self) -> bool:
        return self.password == self.confirm_password


class LoginForm(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
