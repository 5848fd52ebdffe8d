from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class ProfessionalBase(BaseModel):
    name: str = Field(max_length=100)
    email: EmailStr
    business_name: str | None = Field(default=None, max_length=200)
    city: str | None = Field(default=None, max_length=100)
    bio: str | None = None


class ProfessionalCreate(ProfessionalBase):
    pass


class ProfessionalRead(ProfessionalBase):
    id: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
