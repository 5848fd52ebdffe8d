"""Professional API routes: register and look up service providers."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from glowbook.api.dependencies import require_professional
from glowbook.booking.store import save_weekly_availability
from glowbook.database import get_db
from glowbook.models.professional import Professional
from glowbook.schemas.professional import ProfessionalCreate, ProfessionalRead
from glowbook.scheduling.availability import WeeklyAvailability

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/professionals", tags=["professionals"])


@router.post("", response_model=ProfessionalRead, status_code=201)
async def create_professional(
    body: ProfessionalCreate,
    session: AsyncSession = Depends(get_db),
) -> Professional:
    """Register a professional with Monday-Friday 9-5 hours.

    Returns 409 if the email is already taken.
    """
    existing = await session.execute(
        select(Professional).where(Professional.email == body.email)
    )
    if existing.scalar_one_or_none() is not None:
        raise HTTPException(status_code=409, detail="Email already registered")

    professional = Professional(**body.model_dump())
    session.add(professional)
    await session.flush()
    await save_weekly_availability(session, professional.id, WeeklyAvailability.default())
    await session.refresh(professional)
    logger.info("Professional %s registered", professional.id)
    return professional


@router.get("/{professional_id}", response_model=ProfessionalRead)
async def read_professional(
    professional: Professional = Depends(require_professional),
) -> Professional:
    return professional
