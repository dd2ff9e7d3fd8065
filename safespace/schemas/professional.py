# safespace/schemas/professional.py
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from safespace.schemas.common import RowModel

SPECIALIZATIONS = [
    "Anxiety", "Depression", "Stress", "Self-Esteem", "Relationships",
    "Family Issues", "Grief", "Trauma", "ADHD", "Academic Pressure",
]

LANGUAGES = ["English", "Spanish", "French", "Mandarin", "Hindi", "Arabic", "Portuguese"]


class ProfessionalRow(RowModel):
    id: str
    user_id: str
    full_name: str
    title: str
    specializations: List[str] = []
    languages: List[str] = []
    bio: Optional[str] = None
    certification_details: Optional[str] = None
    status: Literal["pending", "verified", "rejected"]
    verified_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class UserRoleRow(RowModel):
    id: str
    user_id: str
    role: Literal["user", "professional"]


class ProfessionalRegistration(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=200)
    title: str = Field(..., min_length=1, max_length=200)
    specializations: List[str] = Field(..., min_length=1)
    languages: List[str] = Field(default_factory=lambda: ["English"], min_length=1)
    bio: Optional[str] = None
    certification_details: Optional[str] = None

    @field_validator("full_name", "title")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("specializations")
    @classmethod
    def _known_specializations(cls, value: List[str]) -> List[str]:
        unknown = [s for s in value if s not in SPECIALIZATIONS]
        if unknown:
            raise ValueError(f"unknown specializations: {', '.join(unknown)}")
        return value

    @field_validator("languages")
    @classmethod
    def _known_languages(cls, value: List[str]) -> List[str]:
        unknown = [l for l in value if l not in LANGUAGES]
        if unknown:
            raise ValueError(f"unknown languages: {', '.join(unknown)}")
        return value
