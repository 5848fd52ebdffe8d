from fastapi import Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from glowbook.booking.store import get_professional
from glowbook.database import get_db
from glowbook.models.professional import Professional


async def ensure_professional(session: AsyncSession, professional_id: int) -> Professional:
    """Load a professional or raise a 404."""
    professional = await get_professional(session, professional_id)
    if professional is None:
        raise HTTPException(status_code=404, detail="Professional not found")
    return professional


async def require_professional(
    professional_id: int,
    session: AsyncSession = Depends(get_db),
) -> Professional:
    """Route dependency: `professional_id` from the path or query must exist."""
    return await ensure_professional(session, professional_id)
