from fastapi import APIRouter, Depends, HTTPException, status
from typing import List

from .. import schemas, crud
from ..config import settings
from ..database import Database, get_db
from ..exceptions import StoreOperationError

router = APIRouter(prefix="/reservations", tags=["Reservations"])


@router.get("/{guest_id}", response_model=List[schemas.ReservationRead])
async def read_guest_reservations(
        guest_id: int,
        limit: int = settings.DEFAULT_RESULT_LIMIT,
        db: Database = Depends(get_db)
):
    """
    Get the reservations of a guest, earliest start date first.
    """
    try:
        return await crud.get_all_reservations(db, guest_id, limit=limit)
    except StoreOperationError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"An error occurred while reading reservations: {e.message}"
        )
