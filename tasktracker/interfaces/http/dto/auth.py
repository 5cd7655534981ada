from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RegisterForm(BaseModel):
    model_config = ConfigDict(extra="ignore")

    username: str = Field("", max_length=64)
    email: str = Field("", max_length=254)
    password: str = Field("", max_length=128)


class LoginForm(BaseModel):
    model_config = ConfigDict(extra="ignore")

    email: str = Field("", max_length=254)
    password: str = Field("", max_length=128)
