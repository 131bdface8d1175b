from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from bakery.core.security import require_permission
from bakery.db.session import get_db
from bakery.models.user import User
from bakery.schemas.category import CategoryCreate, CategoryOut, CategoryUpdate
from bakery.services import permission_service as perm
from bakery.services.category_service import CategoryService

router = APIRouter()


@router.get("", response_model=List[CategoryOut])
def list_categories(
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(require_permission(perm.READ, perm.CATEGORY)),
):
    return CategoryService.list_categories(db)


@router.get("/{category_id}", response_model=CategoryOut)
def get_category(
    category_id: str,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(require_permission(perm.READ, perm.CATEGORY)),
):
    return CategoryService.get_category(db, category_id)


@router.post("", response_model=CategoryOut, status_code=status.HTTP_201_CREATED)
def create_category(
    payload: CategoryCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission(perm.CREATE, perm.CATEGORY)),
):
    return CategoryService.create_category(db, payload.model_dump(exclude_none=True))


@router.put("/{category_id}", response_model=CategoryOut)
def update_category(
    category_id: str,
    payload: CategoryUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission(perm.UPDATE, perm.CATEGORY)),
):
    """Rename a category; products filed under it follow the new name and slug."""
    return CategoryService.update_category(db, category_id, payload.model_dump(exclude_unset=True))


@router.delete("/{category_id}")
def delete_category(
    category_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission(perm.DELETE, perm.CATEGORY)),
):
    CategoryService.delete_category(db, category_id)
    return {"message": "Category deleted successfully"}
