"""Animal request/response schemas."""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class AnimalBase(BaseModel):
    """Editable animal fields. Only presence is checked, never content."""
    name: Optional[str] = None
    species: Optional[str] = None
    breed: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    temperament: Optional[str] = None
    ideal_home: Optional[str] = None
    lifestyle_needs: Optional[str] = None
    vaccination_status: Optional[str] = None
    health_issues: Optional[str] = None
    adoption_status: Optional[str] = None


class AnimalWrite(AnimalBase):
    """Body of create and update; ``image_path`` sets the front image."""
    image_path: Optional[str] = None

    def front_image_path(self) -> str:
        return (self.image_path or "").strip()


class AnimalSummary(BaseModel):
    animal_id: int
    name: Optional[str] = None
    species: Optional[str] = None
    breed: Optional[str] = None
    age_months: Optional[int] = None
    gender: Optional[str] = None
    adoption_status: Optional[str] = None
    vaccination_status: Optional[str] = None
    temperament: Optional[str] = None
    image: Optional[str] = None


class AnimalImageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    image_type: str
    image_path: str


class AnimalDetail(AnimalBase):
    animal_id: int
    age_months: Optional[int] = None
    images: List[AnimalImageResponse] = []


class AnimalCreated(BaseModel):
    message: str
    animal_id: int
