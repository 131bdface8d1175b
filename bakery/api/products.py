import json
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.orm import Session

from bakery.core.exceptions import ValidationError
from bakery.core.security import require_permission
from bakery.db.session import get_db, get_storage
from bakery.models.user import User
from bakery.schemas.product import ImageUploadOut, ProductOut
from bakery.services import permission_service as perm
from bakery.services.product_service import ProductService, UploadedImage
from bakery.storage import ObjectStorage
from bakery.utils.validation import coerce_bool

router = APIRouter()


def _read_uploads(files: Optional[List[UploadFile]]) -> List[UploadedImage]:
    uploads = []
    for upload in files or []:
        if not upload.filename:
            continue
        uploads.append(
            UploadedImage(
                filename=upload.filename,
                content=upload.file.read(),
                content_type=upload.content_type,
            )
        )
    return uploads


def _form_fields(**fields) -> Dict[str, Any]:
    """Only the form fields that were actually sent."""
    return {key: value for key, value in fields.items() if value is not None}


def _parse_url_list(raw: Optional[str]) -> Optional[List[str]]:
    if raw is None:
        return None
    try:
        urls = json.loads(raw)
    except json.JSONDecodeError:
        raise ValidationError("existing_image_urls must be a JSON list of URLs")
    if not isinstance(urls, list):
        raise ValidationError("existing_image_urls must be a JSON list of URLs")
    return urls


@router.get("", response_model=List[ProductOut])
def list_products(
    slug: Optional[str] = Query(None),
    category_slug: Optional[str] = Query(None),
    featured: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(require_permission(perm.READ, perm.PRODUCT)),
):
    """List products, filtered by slug, category or featured flag."""
    return ProductService.list_products(
        db,
        slug=slug,
        category_slug=category_slug,
        featured=coerce_bool(featured) if featured is not None else None,
    )


@router.get("/featured", response_model=List[ProductOut])
def list_featured_products(
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(require_permission(perm.READ, perm.PRODUCT)),
):
    return ProductService.list_products(db, featured=True)


@router.post("/images", response_model=ImageUploadOut, status_code=status.HTTP_201_CREATED)
def upload_product_images(
    images: List[UploadFile] = File(...),
    storage: ObjectStorage = Depends(get_storage),
    current_user: User = Depends(require_permission(perm.CREATE, perm.PRODUCT_IMAGE)),
):
    """
    Store images ahead of a product change request and return their URLs.
    """
    uploads = _read_uploads(images)
    if not uploads:
        raise ValidationError("At least one image is required")
    return ImageUploadOut(urls=ProductService.upload_images(storage, uploads))


@router.get("/{product_id}", response_model=ProductOut)
def get_product(
    product_id: str,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(require_permission(perm.READ, perm.PRODUCT)),
):
    return ProductService.get_product(db, product_id)


@router.post("", response_model=ProductOut, status_code=status.HTTP_201_CREATED)
def create_product(
    name: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    slug: Optional[str] = Form(None),
    category_slug: Optional[str] = Form(None),
    featured: Optional[str] = Form(None),
    images: Optional[List[UploadFile]] = File(None),
    db: Session = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    current_user: User = Depends(require_permission(perm.CREATE, perm.PRODUCT)),
):
    data = _form_fields(
        name=name,
        price=price,
        description=description,
        slug=slug,
        category_slug=category_slug,
        featured=featured,
    )
    return ProductService.create_product_with_images(db, storage, data, _read_uploads(images))


@router.put("/{product_id}", response_model=ProductOut)
def update_product(
    product_id: str,
    name: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    slug: Optional[str] = Form(None),
    category_slug: Optional[str] = Form(None),
    featured: Optional[str] = Form(None),
    existing_image_urls: Optional[str] = Form(None),
    images: Optional[List[UploadFile]] = File(None),
    db: Session = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    current_user: User = Depends(require_permission(perm.UPDATE, perm.PRODUCT)),
):
    """
    Update a product. ``existing_image_urls`` is the JSON list of current
    images to keep; new files in ``images`` are appended.
    """
    data = _form_fields(
        name=name,
        price=price,
        description=description,
        slug=slug,
        category_slug=category_slug,
        featured=featured,
    )
    return ProductService.update_product_with_images(
        db,
        storage,
        product_id,
        data,
        _read_uploads(images),
        kept_image_urls=_parse_url_list(existing_image_urls),
    )


@router.delete("/{product_id}")
def delete_product(
    product_id: str,
    db: Session = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    current_user: User = Depends(require_permission(perm.DELETE, perm.PRODUCT)),
):
    ProductService.delete_product(db, storage, product_id)
    return {"message": "Product deleted successfully"}
