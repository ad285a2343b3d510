"""
==============================================================================
Validation Utilities Module
==============================================================================

Validation for product payloads submitted to the catalog.

This module implements:
- ProductValidator: Checks every field rule and normalizes the payload

Validation Rules:
----------------
- name: string, at least 2 characters after trimming
- description: string, at least 5 characters after trimming
- price: real number greater than zero
- category: string, at least 2 characters after trimming
- inStock: boolean

Rules are checked independently. A payload that breaks several rules
reports all of them, in the order above.

==============================================================================
"""

from __future__ import annotations

import math
from typing import Any, List, Mapping, Optional, Tuple

from app.catalog.models import ProductCandidate
from app.core import exceptions


class ProductValidator:
    """
    Validator for raw product payloads.

    Example:
        >>> validator = ProductValidator()
        >>> is_valid, candidate, errors = validator.validate(
        ...     {"name": "  Desk Lamp ", "description": "LED lamp",
        ...      "price": 25, "category": "Home", "inStock": True}
        ... )
        >>> candidate.name
        'Desk Lamp'
    """

    # Constraints
    NAME_MIN_LENGTH = 2
    DESCRIPTION_MIN_LENGTH = 5
    CATEGORY_MIN_LENGTH = 2

    NAME_ERROR = f"Name is required and must be at least {NAME_MIN_LENGTH} characters"
    DESCRIPTION_ERROR = (
        f"Description is required and must be at least {DESCRIPTION_MIN_LENGTH} characters"
    )
    PRICE_ERROR = "Price is required and must be a positive number"
    CATEGORY_ERROR = (
        f"Category is required and must be at least {CATEGORY_MIN_LENGTH} characters"
    )
    IN_STOCK_ERROR = "inStock is required and must be a boolean value"

    def validate(
        self,
        payload: Mapping[str, Any]
    ) -> Tuple[bool, Optional[ProductCandidate], List[str]]:
        """
        Validate and normalize a product payload.

        Args:
            payload: Raw decoded JSON object

        Returns:
            Tuple of (is_valid, candidate, errors)
            - If valid: (True, ProductCandidate, [])
            - If invalid: (False, None, ["Rule description", ...])
        """
        errors: List[str] = []

        name = payload.get("name")
        description = payload.get("description")
        price = payload.get("price")
        category = payload.get("category")
        in_stock = payload.get("inStock")

        if not self._is_text(name, self.NAME_MIN_LENGTH):
            errors.append(self.NAME_ERROR)

        if not self._is_text(description, self.DESCRIPTION_MIN_LENGTH):
            errors.append(self.DESCRIPTION_ERROR)

        if not self._is_positive_number(price):
            errors.append(self.PRICE_ERROR)

        if not self._is_text(category, self.CATEGORY_MIN_LENGTH):
            errors.append(self.CATEGORY_ERROR)

        if not isinstance(in_stock, bool):
            errors.append(self.IN_STOCK_ERROR)

        if errors:
            return False, None, errors

        candidate = ProductCandidate(
            name=name.strip(),
            description=description.strip(),
            price=price,
            category=category.strip(),
            in_stock=in_stock,
        )
        return True, candidate, []

    def validate_or_raise(self, payload: Mapping[str, Any]) -> ProductCandidate:
        """
        Validate a payload, raising on failure.

        Raises:
            AppException: ValidationError listing every violated rule
        """
        is_valid, candidate, errors = self.validate(payload)
        if not is_valid:
            raise exceptions.validation_failed(errors)
        return candidate

    def is_valid(self, payload: Mapping[str, Any]) -> bool:
        """Quick validation check."""
        is_valid, _, _ = self.validate(payload)
        return is_valid

    @staticmethod
    def _is_text(value: Any, min_length: int) -> bool:
        return isinstance(value, str) and len(value.strip()) >= min_length

    @staticmethod
    def _is_positive_number(value: Any) -> bool:
        # bool is an int subclass but never a price
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        try:
            number = float(value)
        except OverflowError:
            return False
        return math.isfinite(number) and number > 0
