"""Animal listing models."""

from sqlalchemy import Column, String, Integer, Date, Text, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from app.core.database import Base


FRONT_IMAGE = "front"


class Animal(Base):
    """An animal available for adoption."""
    __tablename__ = "animals"

    animal_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100))
    species = Column(String(50))
    breed = Column(String(100))
    date_of_birth = Column(Date)
    gender = Column(String(20))
    temperament = Column(String(255))
    ideal_home = Column(Text)
    lifestyle_needs = Column(Text)
    vaccination_status = Column(String(50))
    health_issues = Column(Text)
    adoption_status = Column(String(50))

    # Relationships
    images = relationship("AnimalImage", back_populates="animal")


class AnimalImage(Base):
    """Typed image of an animal; at most one per type."""
    __tablename__ = "animal_images"

    image_id = Column(Integer, primary_key=True, autoincrement=True)
    animal_id = Column(Integer, ForeignKey("animals.animal_id"), nullable=False, index=True)
    image_type = Column(String(20), nullable=False, default=FRONT_IMAGE)
    image_path = Column(String(255), nullable=False)

    # Relationships
    animal = relationship("Animal", back_populates="images")

    __table_args__ = (
        UniqueConstraint("animal_id", "image_type"),
    )
