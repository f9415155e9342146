from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

class Profile(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    username: Optional[str] = None
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    updated_at: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _as_str(cls, v: Any) -> str:
        return str(v) if v is not None else v

class ProfileUpdate(BaseModel):
    username: Optional[str] = Field(default=None, min_length=1)
    full_name: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
