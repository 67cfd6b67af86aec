# =============================================================================
# core/services/category_service.py - Category Business Logic
# =============================================================================
# Handles CRUD for user-defined categories. Names are unique per user,
# compared case-insensitively through the normalized_name column.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import is_blank, normalize_uuid
from core.models.category import (
    CategoryCreate,
    CategoryResponse,
    CategoryType,
    CategoryUpdate,
)
from app.exceptions import (
    CategoryAlreadyExistsError,
    CategoryNameNotFoundError,
    CategoryNotFoundError,
    CategoryOperationError,
    InvalidDataError,
    InvalidUserIdError,
    InvalidUuidError,
)

logger = logging.getLogger(__name__)

CATEGORIES_TABLE = "categories"


def normalize_name(name: str) -> str:
    """Key used for case-insensitive name comparisons."""
    return name.strip().casefold()


class CategoryService:
    """
    Service for category management operations.

    Every operation is scoped to the owning user; another user's category
    is reported as not found.
    """

    @staticmethod
    def _fetch_owned(user_id: str | UUID, category_id: str | UUID | None) -> dict[str, Any]:
        if is_blank(category_id):
            raise InvalidUuidError()

        category_id_str = normalize_uuid(category_id)
        try:
            row = SupabaseClient.fetch_by_id(CATEGORIES_TABLE, category_id_str)
        except SupabaseClientError as e:
            raise CategoryOperationError("Failed to load category.", error=str(e)) from e

        if not row or str(row.get("user_id")) != str(user_id):
            raise CategoryNotFoundError(category_id_str)
        return row

    @staticmethod
    def _name_taken(user_id: str, name: str, exclude_id: str | None = None) -> bool:
        try:
            return SupabaseClient.exists(
                CATEGORIES_TABLE,
                {"user_id": user_id, "normalized_name": normalize_name(name)},
                exclude_id=exclude_id,
            )
        except SupabaseClientError as e:
            raise CategoryOperationError("Failed to check for an existing category.", error=str(e)) from e

    @staticmethod
    def create_category(user_id: str | UUID, data: CategoryCreate) -> CategoryResponse:
        """
        Create a category for a user.

        Raises:
            InvalidUserIdError: If user_id is blank
            InvalidDataError: If the name is blank
            CategoryAlreadyExistsError: If the user already has this name
            CategoryOperationError: If the insert fails
        """
        if is_blank(user_id):
            raise InvalidUserIdError()
        if is_blank(data.name):
            raise InvalidDataError("The category name cannot be empty.")

        user_id_str = normalize_uuid(user_id)
        name = data.name.strip()

        if CategoryService._name_taken(user_id_str, name):
            raise CategoryAlreadyExistsError(name)

        try:
            row = SupabaseClient.insert_row(CATEGORIES_TABLE, {
                "user_id": user_id_str,
                "name": name,
                "normalized_name": normalize_name(name),
                "type": data.type.value,
            })
        except SupabaseClientError as e:
            if e.code == "UNIQUE_VIOLATION":
                raise CategoryAlreadyExistsError(name) from e
            logger.error(f"Failed to create category: {e}")
            raise CategoryOperationError("Failed to create category. Please try again.", error=str(e)) from e

        logger.info(f"Created category: {row['id']} for user: {user_id_str}")
        return CategoryResponse.model_validate(row)

    @staticmethod
    def list_categories(
        user_id: str | UUID,
        category_type: CategoryType | None = None,
    ) -> list[CategoryResponse]:
        """
        List a user's categories, optionally filtered by type.

        Returns an empty list when the user has none.
        """
        if is_blank(user_id):
            raise InvalidUserIdError()

        filters: dict[str, Any] = {"user_id": normalize_uuid(user_id)}
        if category_type:
            filters["type"] = category_type.value

        try:
            rows = SupabaseClient.fetch_all(CATEGORIES_TABLE, filters, order_by="name")
        except SupabaseClientError as e:
            logger.error(f"Failed to list categories: {e}")
            raise CategoryOperationError("Failed to list categories. Please try again.", error=str(e)) from e

        return [CategoryResponse.model_validate(row) for row in rows]

    @staticmethod
    def get_category(user_id: str | UUID, category_id: str | UUID | None) -> CategoryResponse:
        """
        Get one of the user's categories by ID.

        Raises:
            CategoryNotFoundError: If it doesn't exist or belongs to someone else
        """
        return CategoryResponse.model_validate(CategoryService._fetch_owned(user_id, category_id))

    @staticmethod
    def get_category_by_name(user_id: str | UUID, name: str | None) -> CategoryResponse:
        """
        Find one of the user's categories by name (case-insensitive).

        Raises:
            InvalidDataError: If the name is blank
            CategoryNameNotFoundError: If the user has no such category
        """
        if is_blank(name):
            raise InvalidDataError("The category name cannot be empty.")

        try:
            row = SupabaseClient.fetch_one(
                CATEGORIES_TABLE,
                {"user_id": normalize_uuid(user_id), "normalized_name": normalize_name(name)},
            )
        except SupabaseClientError as e:
            raise CategoryOperationError("Failed to look up category.", error=str(e)) from e

        if not row:
            raise CategoryNameNotFoundError(name.strip())
        return CategoryResponse.model_validate(row)

    @staticmethod
    def update_category(
        user_id: str | UUID,
        category_id: str | UUID,
        data: CategoryUpdate,
    ) -> CategoryResponse:
        """
        Rename and/or re-type a category.

        Raises:
            CategoryNotFoundError: If it doesn't exist or belongs to someone else
            InvalidDataError: If the new name is blank
            CategoryAlreadyExistsError: If another category already has the new name
        """
        row = CategoryService._fetch_owned(user_id, category_id)

        update_data: dict[str, Any] = {}
        if data.name is not None:
            if is_blank(data.name):
                raise InvalidDataError("The category name cannot be empty.")
            name = data.name.strip()
            if CategoryService._name_taken(normalize_uuid(user_id), name, exclude_id=row["id"]):
                raise CategoryAlreadyExistsError(name)
            update_data["name"] = name
            update_data["normalized_name"] = normalize_name(name)
        if data.type is not None:
            update_data["type"] = data.type.value

        if not update_data:
            return CategoryResponse.model_validate(row)

        try:
            updated = SupabaseClient.update_row(CATEGORIES_TABLE, row["id"], update_data)
        except SupabaseClientError as e:
            if e.code == "UNIQUE_VIOLATION":
                raise CategoryAlreadyExistsError(update_data.get("name", row["name"])) from e
            logger.error(f"Failed to update category {row['id']}: {e}")
            raise CategoryOperationError("Failed to update category. Please try again.", error=str(e)) from e

        logger.info(f"Updated category: {row['id']}")
        return CategoryResponse.model_validate(updated or {**row, **update_data})

    @staticmethod
    def delete_category(user_id: str | UUID, category_id: str | UUID) -> None:
        """
        Delete a category.

        Budgets pointing at it are removed by the database (ON DELETE CASCADE).
        """
        row = CategoryService._fetch_owned(user_id, category_id)

        try:
            SupabaseClient.delete_row(CATEGORIES_TABLE, row["id"])
        except SupabaseClientError as e:
            logger.error(f"Failed to delete category {row['id']}: {e}")
            raise CategoryOperationError("Failed to delete category. Please try again.", error=str(e)) from e

        logger.info(f"Deleted category: {row['id']}")
