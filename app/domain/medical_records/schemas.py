from typing import Optional

from pydantic import BaseModel, Field


class MedicalRecordCreate(BaseModel):
    doctorId: Optional[str] = None
    date: Optional[str] = None
    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = Field(None, max_length=20000)


class MedicalRecordResponse(BaseModel):
    id: str
    date: str
    title: str
    description: str
    doctorName: str
