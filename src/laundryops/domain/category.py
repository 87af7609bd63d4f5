"""Category domain service."""

import logging
from typing import Optional

from laundryops.database.base import Database
from laundryops.domain.entities import Category as CategoryEntity, CategoryStatus
from laundryops.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    category_delete_blocked,
    category_not_found,
    duplicate_category_code,
)

_log = logging.getLogger(__name__)


def _parse_status(status: "str | CategoryStatus") -> CategoryStatus:
    try:
        return CategoryStatus(status.strip().lower() if isinstance(status, str) else status)
    except ValueError:
        raise ValidationError(
            f"Invalid category status '{status}'. Expected one of: "
            + ", ".join(s.value for s in CategoryStatus)
        )


def _required(value: Optional[str], label: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValidationError(f"Category {label} is required")
    return value


class CategoryService:
    """Service for managing item categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(
        self,
        code: str,
        name: str,
        description: Optional[str] = "",
        status: "str | CategoryStatus" = CategoryStatus.ACTIVE,
    ) -> int:
        """Create a category.

        Args:
            code: Short unique category code (e.g., "LIN")
            name: Category name, referenced by items
            description: Optional free-text description
            status: "active" or "inactive"

        Returns:
            Category ID

        Raises:
            ValidationError: If code or name is empty or status is invalid
            ConflictError: If a category with the same code exists
        """
        code = _required(code, "code")
        name = _required(name, "name")
        parsed_status = _parse_status(status)

        if self.db.get_category_by_code(code) is not None:
            raise ConflictError(duplicate_category_code(code))

        category_id = self.db.create_category(
            code=code,
            name=name,
            description=(description or "").strip(),
            status=parsed_status.value,
        )
        _log.info("Created category %s (%s) id=%s", code, name, category_id)
        return category_id

    def get_category(self, category_id: int) -> Optional[CategoryEntity]:
        """Get category by ID.

        Args:
            category_id: Category ID

        Returns:
            Category entity or None if not found
        """
        return self.db.get_category(category_id)

    def list_categories(self) -> list[CategoryEntity]:
        """List all categories ordered by code."""
        return self.db.list_categories()

    def search_categories(self, term: str = "") -> list[CategoryEntity]:
        """Case-insensitive substring search on category name or code."""
        term = (term or "").strip().lower()
        categories = self.db.list_categories()
        if not term:
            return categories
        return [
            cat
            for cat in categories
            if term in cat.name.lower() or term in cat.code.lower()
        ]

    def update_category(
        self,
        category_id: int,
        code: Optional[str] = None,
        name: Optional[str] = None,
        description: Optional[str] = None,
        status: "str | CategoryStatus | None" = None,
    ) -> CategoryEntity:
        """Update a category; fields left as None keep their value.

        ``created_at`` is preserved and ``updated_at`` refreshed.

        Raises:
            NotFoundError: If the category does not exist
            ValidationError: If code or name would become empty
            ConflictError: If the new code belongs to another category
        """
        category = self.db.get_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))

        new_code = _required(code, "code") if code is not None else category.code
        new_name = _required(name, "name") if name is not None else category.name
        new_description = description.strip() if description is not None else category.description
        new_status = _parse_status(status) if status is not None else category.status

        existing = self.db.get_category_by_code(new_code)
        if existing is not None and existing.id != category_id:
            raise ConflictError(duplicate_category_code(new_code))

        self.db.update_category(
            category_id,
            code=new_code,
            name=new_name,
            description=new_description,
            status=new_status.value,
        )
        _log.info("Updated category id=%s", category_id)
        return self.db.get_category(category_id)

    def count_items_referencing(self, category_name: str) -> int:
        """Count catalog items that reference a category by name."""
        return self.db.count_items_in_category(category_name)

    def delete_category(self, category_id: int) -> None:
        """Delete a category.

        Raises:
            NotFoundError: If the category does not exist
            DependencyError: If any item still references the category name
        """
        category = self.db.get_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))

        item_count = self.count_items_referencing(category.name)
        if item_count > 0:
            _log.warning(
                "Refused to delete category id=%s: %s item(s) reference it",
                category_id,
                item_count,
            )
            raise DependencyError(category_delete_blocked(category.name, item_count))

        self.db.delete_category(category_id)
        _log.info("Deleted category id=%s", category_id)
