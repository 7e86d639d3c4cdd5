from fastapi import APIRouter, Depends, HTTPException, status
from typing import List, Optional, Union

from .. import schemas, crud
from ..config import settings
from ..database import Database, get_db
from ..exceptions import StoreConstraintError, StoreOperationError

router = APIRouter(prefix="/properties", tags=["Properties"])


@router.get("/", response_model=List[schemas.PropertyRead])
async def read_properties(
        city: Optional[str] = None,
        minimum_price_per_night: Optional[Union[int, float]] = None,
        maximum_price_per_night: Optional[Union[int, float]] = None,
        minimum_rating: Optional[Union[int, float]] = None,
        owner_id: Optional[int] = None,
        limit: int = settings.DEFAULT_RESULT_LIMIT,
        db: Database = Depends(get_db)
):
    search = schemas.PropertySearch(
        city=city,
        minimum_price_per_night=minimum_price_per_night,
        maximum_price_per_night=maximum_price_per_night,
        minimum_rating=minimum_rating,
        owner_id=owner_id,
    )
    try:
        return await crud.get_all_properties(db, search, limit=limit)
    except StoreOperationError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"An error occurred while searching properties: {e.message}"
        )


@router.post("/", response_model=schemas.PropertyRead, status_code=status.HTTP_201_CREATED)
async def create_property(
        property: schemas.PropertyCreate,
        db: Database = Depends(get_db)
):
    try:
        db_property = await crud.add_property(db, property)
    except StoreConstraintError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    except StoreOperationError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"An error occurred while creating the property: {e.message}"
        )
    return db_property
