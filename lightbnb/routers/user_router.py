from fastapi import APIRouter, Depends, HTTPException, status

from .. import schemas, crud
from ..database import Database, get_db
from ..exceptions import StoreConstraintError, StoreOperationError

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("/", response_model=schemas.UserRead, status_code=status.HTTP_201_CREATED)
async def create_user(user: schemas.UserCreate, db: Database = Depends(get_db)):
    try:
        return await crud.add_user(db, user)
    except StoreConstraintError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A user with this email already exists."
        )
    except StoreOperationError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"An error occurred while creating the user: {e.message}"
        )


@router.get("/{user_id}", response_model=schemas.UserRead)
async def read_user(user_id: int, db: Database = Depends(get_db)):
    try:
        db_user = await crud.get_user_with_id(db, user_id)
    except StoreOperationError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"An error occurred while reading the user: {e.message}"
        )
    if db_user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return db_user
