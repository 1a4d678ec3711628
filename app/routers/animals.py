"""Animal listing and profile endpoints."""

from typing import List, Optional
from datetime import date
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select, update, delete, and_
import structlog

from app.core.database import conflict_insert
from app.core.dependencies import get_db
from app.models.animals import Animal, AnimalImage, FRONT_IMAGE
from app.schemas.animals import (
    AnimalWrite, AnimalSummary, AnimalDetail, AnimalCreated
)
from app.schemas.common import MessageResponse

logger = structlog.get_logger()
router = APIRouter(tags=["animals"])

ANIMAL_FIELDS = (
    "name", "species", "breed", "date_of_birth", "gender", "temperament",
    "ideal_home", "lifestyle_needs", "vaccination_status", "health_issues",
    "adoption_status",
)


def age_in_months(date_of_birth: Optional[date], today: Optional[date] = None) -> Optional[int]:
    """Whole calendar months elapsed since ``date_of_birth``."""
    if date_of_birth is None:
        return None
    today = today or date.today()
    months = (today.year - date_of_birth.year) * 12 + (today.month - date_of_birth.month)
    if today.day < date_of_birth.day:
        months -= 1
    return months


def _animal_values(animal: AnimalWrite) -> dict:
    return animal.model_dump(include=set(ANIMAL_FIELDS))


@router.get("/animals", response_model=List[AnimalSummary])
async def list_animals(db: AsyncSession = Depends(get_db)):
    """List every animal with its front image."""
    result = await db.execute(
        select(Animal, AnimalImage.image_path)
        .outerjoin(
            AnimalImage,
            and_(
                AnimalImage.animal_id == Animal.animal_id,
                AnimalImage.image_type == FRONT_IMAGE
            )
        )
        .order_by(Animal.animal_id)
    )

    animals = []
    for animal, image_path in result:
        animals.append({
            "animal_id": animal.animal_id,
            "name": animal.name,
            "species": animal.species,
            "breed": animal.breed,
            "age_months": age_in_months(animal.date_of_birth),
            "gender": animal.gender,
            "adoption_status": animal.adoption_status,
            "vaccination_status": animal.vaccination_status,
            "temperament": animal.temperament,
            "image": image_path
        })
    return animals


@router.get("/animals/{animal_id}", response_model=AnimalDetail)
async def get_animal(animal_id: int, db: AsyncSession = Depends(get_db)):
    """Get a full animal profile with all of its images."""
    animal = await db.get(Animal, animal_id)
    if not animal:
        raise HTTPException(status_code=404, detail="Animal not found")

    images = await db.execute(
        select(AnimalImage)
        .where(AnimalImage.animal_id == animal_id)
        .order_by(AnimalImage.image_id)
    )

    profile = {field: getattr(animal, field) for field in ANIMAL_FIELDS}
    profile.update(
        animal_id=animal.animal_id,
        age_months=age_in_months(animal.date_of_birth),
        images=[
            {"image_type": image.image_type, "image_path": image.image_path}
            for image in images.scalars()
        ]
    )
    return profile


@router.post("/animals", response_model=AnimalCreated)
async def create_animal(animal: AnimalWrite, db: AsyncSession = Depends(get_db)):
    """Add an animal, with an optional front image."""
    db_animal = Animal(**_animal_values(animal))
    db.add(db_animal)

    try:
        await db.flush()
        image_path = animal.front_image_path()
        if image_path:
            db.add(AnimalImage(
                animal_id=db_animal.animal_id,
                image_type=FRONT_IMAGE,
                image_path=image_path
            ))
        await db.commit()
    except SQLAlchemyError as e:
        logger.error("Failed to create animal", error=str(e))
        await db.rollback()
        raise

    logger.info("Animal created", animal_id=db_animal.animal_id, has_image=bool(image_path))
    return {"message": "Animal added", "animal_id": db_animal.animal_id}


@router.put("/animals/{animal_id}", response_model=MessageResponse)
async def update_animal(animal_id: int, animal: AnimalWrite, db: AsyncSession = Depends(get_db)):
    """Replace every animal field; upsert the front image when one is given."""
    try:
        result = await db.execute(
            update(Animal)
            .where(Animal.animal_id == animal_id)
            .values(**_animal_values(animal))
        )
        if result.rowcount == 0:
            await db.rollback()
            raise HTTPException(status_code=404, detail="Animal not found")

        image_path = animal.front_image_path()
        if image_path:
            stmt = conflict_insert(db, AnimalImage).values(
                animal_id=animal_id,
                image_type=FRONT_IMAGE,
                image_path=image_path
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=["animal_id", "image_type"],
                set_={"image_path": stmt.excluded.image_path}
            )
            await db.execute(stmt)
        await db.commit()
    except SQLAlchemyError as e:
        logger.error("Failed to update animal", animal_id=animal_id, error=str(e))
        await db.rollback()
        raise

    logger.info("Animal updated", animal_id=animal_id, image_updated=bool(image_path))
    return {"message": "Animal updated"}


@router.delete("/animals/{animal_id}", response_model=MessageResponse)
async def delete_animal(animal_id: int, db: AsyncSession = Depends(get_db)):
    """Delete an animal and its images together."""
    try:
        await db.execute(delete(AnimalImage).where(AnimalImage.animal_id == animal_id))
        result = await db.execute(delete(Animal).where(Animal.animal_id == animal_id))
        if result.rowcount == 0:
            # Nothing to delete; keep the image rows as they were
            await db.rollback()
            raise HTTPException(status_code=404, detail="Animal not found")
        await db.commit()
    except SQLAlchemyError as e:
        logger.error("Failed to delete animal", animal_id=animal_id, error=str(e))
        await db.rollback()
        raise

    logger.info("Animal deleted", animal_id=animal_id)
    return {"message": "Animal deleted"}
