"""
Product Service Module.
Handles catalogue CRUD, image uploads to object storage and image clean-up.
"""
import logging
import time
import uuid
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

from sqlalchemy.orm import Session

from bakery.core.exceptions import (
    BackendUnavailableError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from bakery.models.product import Product
from bakery.repositories.category_repository import CategoryRepository
from bakery.repositories.product_repository import ProductRepository
from bakery.storage import ObjectStorage
from bakery.utils.validation import (
    coerce_bool,
    coerce_price,
    coerce_text,
    sanitize_filename,
    slugify,
)

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "name",
    "slug",
    "description",
    "price",
    "category",
    "category_slug",
    "images",
    "featured",
)

TEXT_FIELDS = ("name", "slug", "description", "category", "category_slug")

PRODUCT_IMAGE_PREFIX = "products"


@dataclass
class UploadedImage:
    """An image received from the client, not yet stored."""

    filename: str
    content: bytes
    content_type: Optional[str] = None


def _editable(data: Dict[str, Any]) -> Dict[str, Any]:
    fields = {key: value for key, value in (data or {}).items() if key in EDITABLE_FIELDS}
    for key in TEXT_FIELDS:
        if fields.get(key) is not None:
            fields[key] = coerce_text(fields[key], f"Product {key}")
    return fields


def _normalize_images(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str) or not isinstance(value, Iterable):
        raise ValidationError("Images must be a list of URLs")
    images = [url.strip() for url in value if isinstance(url, str) and url.strip()]
    # keep order, drop duplicates
    return list(dict.fromkeys(images))


class ProductService:
    """Service for managing catalogue products."""

    @staticmethod
    def list_products(
        db: Session,
        slug: Optional[str] = None,
        category_slug: Optional[str] = None,
        featured: Optional[bool] = None,
    ) -> List[Product]:
        return ProductRepository(db).list_products(
            slug=slug, category_slug=category_slug, featured=featured
        )

    @staticmethod
    def get_product(db: Session, product_id: str) -> Product:
        product = ProductRepository(db).get_by_id(product_id)
        if not product:
            raise NotFoundError("Product not found")
        return product

    @staticmethod
    def _apply_category(db: Session, fields: Dict[str, Any]) -> None:
        """Resolve the category display name from its slug and reject unknown slugs."""
        if "category_slug" not in fields:
            return
        category_slug = fields["category_slug"] or None
        fields["category_slug"] = category_slug
        if category_slug is None:
            fields["category"] = None
            return
        category = CategoryRepository(db).get_by_slug(category_slug)
        if category is None:
            raise ValidationError(f"Unknown category: {category_slug}")
        fields["category"] = category.name

    @staticmethod
    def create_product(db: Session, data: Dict[str, Any], commit: bool = True) -> Product:
        """
        Create a product from a field mapping.

        Price is coerced to a number, the slug defaults to one derived from the
        name, and at least one image URL is required.
        """
        fields = _editable(data)

        name = fields.get("name")
        if not name:
            raise ValidationError("Product name is required")

        if fields.get("price") in (None, ""):
            raise ValidationError("Product price is required")
        fields["price"] = coerce_price(fields["price"])

        fields["slug"] = slugify(fields.get("slug") or name)
        if not fields["slug"]:
            raise ValidationError("Product slug could not be derived from its name")

        fields["images"] = _normalize_images(fields.get("images"))
        if not fields["images"]:
            raise ValidationError("A product must have at least one image")

        fields["featured"] = coerce_bool(fields.get("featured", False))
        ProductService._apply_category(db, fields)

        repo = ProductRepository(db)
        if repo.slug_taken(fields["slug"]):
            raise ConflictError(f"A product with slug '{fields['slug']}' already exists")

        product = repo.create(Product(**fields))
        if commit:
            db.commit()
            db.refresh(product)
        logger.info("Created product id=%s slug=%s", product.id, product.slug)
        return product

    @staticmethod
    def update_product(
        db: Session, product_id: str, data: Dict[str, Any], commit: bool = True
    ) -> Tuple[Product, List[str]]:
        """
        Merge the given fields into an existing product.

        Returns:
            The updated product and the image URLs it no longer references
        """
        repo = ProductRepository(db)
        product = repo.get_by_id(product_id)
        if not product:
            raise NotFoundError("Product not found")

        fields = _editable(data)

        if "name" in fields and not fields["name"]:
            raise ValidationError("Product name cannot be empty")
        if "price" in fields:
            fields["price"] = coerce_price(fields["price"])
        if "featured" in fields:
            fields["featured"] = coerce_bool(fields["featured"])
        if "slug" in fields:
            fields["slug"] = slugify(fields["slug"] or fields.get("name") or product.name)
            if repo.slug_taken(fields["slug"], exclude_id=product.id):
                raise ConflictError(f"A product with slug '{fields['slug']}' already exists")

        current_images = list(product.images or [])
        if "images" in fields:
            fields["images"] = _normalize_images(fields["images"])
        final_images = fields.get("images", current_images)
        if not final_images:
            raise ValidationError("A product must have at least one image")

        ProductService._apply_category(db, fields)

        for key, value in fields.items():
            setattr(product, key, value)
        repo.update(product)

        if commit:
            db.commit()
            db.refresh(product)

        discarded = [url for url in current_images if url not in final_images]
        logger.info("Updated product id=%s fields=%s", product.id, sorted(fields))
        return product, discarded

    @staticmethod
    def delete_product(db: Session, storage: ObjectStorage, product_id: str) -> None:
        """Delete a product, then every image it referenced."""
        repo = ProductRepository(db)
        product = repo.get_by_id(product_id)
        if not product:
            raise NotFoundError("Product not found")

        images = list(product.images or [])
        repo.delete(product)
        db.commit()
        logger.info("Deleted product id=%s", product_id)

        ProductService.discard_images(storage, images)

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------

    @staticmethod
    def build_image_path(filename: str) -> str:
        """Unique object path from the current time and the sanitized file name."""
        stamp = int(time.time() * 1000)
        return f"{PRODUCT_IMAGE_PREFIX}/{stamp}-{uuid.uuid4().hex[:8]}-{sanitize_filename(filename)}"

    @staticmethod
    def upload_images(storage: ObjectStorage, uploads: List[UploadedImage]) -> List[str]:
        """
        Store each upload and return the public URLs.

        If any write fails, the objects written by this call are deleted before
        the error propagates.
        """
        urls: List[str] = []
        for upload in uploads:
            if not upload.content:
                ProductService.discard_images(storage, urls)
                raise ValidationError(f"Image '{upload.filename}' is empty")
            if upload.content_type and not upload.content_type.startswith("image/"):
                ProductService.discard_images(storage, urls)
                raise ValidationError(f"File '{upload.filename}' is not an image")
            try:
                info = storage.write(
                    ProductService.build_image_path(upload.filename),
                    upload.content,
                    content_type=upload.content_type,
                )
            except Exception as exc:
                logger.error("Image upload failed for %s: %s", upload.filename, exc)
                ProductService.discard_images(storage, urls)
                raise BackendUnavailableError(f"Failed to upload image '{upload.filename}'") from exc
            urls.append(info.url or storage.public_url(info.path))
        return urls

    @staticmethod
    def discard_images(storage: ObjectStorage, urls: Iterable[str]) -> None:
        """Best-effort delete of stored images; missing or foreign objects are skipped."""
        for url in urls:
            try:
                if not storage.delete_by_url(url):
                    logger.warning("Image not deleted (missing or not ours): %s", url)
            except Exception as exc:
                logger.error("Failed to delete image %s: %s", url, exc)

    @staticmethod
    def create_product_with_images(
        db: Session,
        storage: ObjectStorage,
        data: Dict[str, Any],
        uploads: List[UploadedImage],
    ) -> Product:
        """Upload the images, then create the product; uploads are undone if creation fails."""
        new_urls = ProductService.upload_images(storage, uploads)
        payload = dict(data)
        payload["images"] = _normalize_images(payload.get("images")) + new_urls
        try:
            return ProductService.create_product(db, payload)
        except Exception:
            db.rollback()
            ProductService.discard_images(storage, new_urls)
            raise

    @staticmethod
    def update_product_with_images(
        db: Session,
        storage: ObjectStorage,
        product_id: str,
        data: Dict[str, Any],
        uploads: List[UploadedImage],
        kept_image_urls: Optional[List[str]] = None,
    ) -> Product:
        """
        Update a product and its image set.

        ``kept_image_urls`` lists the existing images to keep (None keeps all of
        them; URLs the product does not own are ignored); uploads are appended.
        Images dropped from the product are deleted from storage once the
        update is committed.
        """
        current_images = list(ProductService.get_product(db, product_id).images or [])
        new_urls = ProductService.upload_images(storage, uploads)
        payload = dict(data)
        if kept_image_urls is not None or new_urls:
            if kept_image_urls is None:
                kept = current_images
            else:
                kept = [url for url in _normalize_images(kept_image_urls) if url in current_images]
            payload["images"] = kept + new_urls
        try:
            product, discarded = ProductService.update_product(db, product_id, payload)
        except Exception:
            db.rollback()
            ProductService.discard_images(storage, new_urls)
            raise

        ProductService.discard_images(storage, discarded)
        return product
