"""Doctor domain schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import BaseModel


class DoctorCreate(BaseModel):
    """Schema for adding a doctor; emptiness is checked by the service"""

    name: Optional[str] = None
    specialization: Optional[str] = None


class DoctorResponse(BaseModel):
    id: str
    name: str
    specialization: str

    class Config:
        from_attributes = True
