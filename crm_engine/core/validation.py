"""
Input validation rules for prospects, properties and deals.

Enforces the data invariants the engines rely on (positive square
footage and clear height) before records reach the store.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from .dates import resolve_now
from .deal import Deal
from .prospect import Prospect
from .warehouse import Property


class ValidationError(Exception):
    """Raised when validation fails."""

    def __init__(self, field: str, message: str, value: Any = None):
        self.field = field
        self.message = message
        self.value = value
        super().__init__(f"{field}: {message}")


@dataclass
class ValidationResult:
    """Result of validation operation."""

    is_valid: bool
    errors: list[ValidationError]
    warnings: list[str]

    def __bool__(self) -> bool:
        return self.is_valid

    def raise_first(self) -> None:
        """Raise the first error, if any."""
        if self.errors:
            raise self.errors[0]


EMAIL_PATTERN = re.compile(r"^[A-Z0-9a-z._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,64}$")

MAX_SQUARE_FOOTAGE = 10_000_000
MAX_CLEAR_HEIGHT = 100.0
MAX_ASKING_RATE = 100.0  # $/SF/year


def validate_email(email: str) -> bool:
    """Check email address format."""
    return bool(EMAIL_PATTERN.match(email.strip()))


def validate_prospect(prospect: Prospect, now: Optional[datetime] = None) -> ValidationResult:
    """
    Validate a prospect for correctness and completeness.

    Returns ValidationResult with any errors found.
    """
    errors: list[ValidationError] = []
    warnings: list[str] = []

    # Required fields
    if not prospect.prospect_id:
        errors.append(ValidationError("prospect_id", "Prospect ID is required"))

    if not prospect.first_name.strip():
        errors.append(ValidationError("first_name", "First name is required"))

    if not prospect.last_name.strip():
        errors.append(ValidationError("last_name", "Last name is required"))

    if not prospect.email.strip():
        errors.append(ValidationError("email", "Email address is required"))
    elif not validate_email(prospect.email):
        errors.append(ValidationError(
            "email",
            "Please enter a valid email address",
            prospect.email
        ))

    if not prospect.phone.strip():
        errors.append(ValidationError("phone", "Phone number is required"))

    # Space requirement
    if prospect.required_square_footage <= 0:
        errors.append(ValidationError(
            "required_square_footage",
            "Required square footage must be greater than 0",
            prospect.required_square_footage
        ))

    # Budget
    if prospect.estimated_value is not None and prospect.estimated_value < 0:
        errors.append(ValidationError(
            "estimated_value",
            "Estimated value cannot be negative",
            prospect.estimated_value
        ))

    now = resolve_now(now)
    if prospect.target_move_date and prospect.target_move_date < now:
        warnings.append("Target move date is in the past")

    return ValidationResult(
        is_valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )


def validate_property(prop: Property) -> ValidationResult:
    """
    Validate a property listing.

    Returns ValidationResult with any errors found.
    """
    errors: list[ValidationError] = []
    warnings: list[str] = []

    if not prop.property_id:
        errors.append(ValidationError("property_id", "Property ID is required"))

    # Address
    address_fields = {
        "address": "Street address",
        "city": "City",
        "state": "State",
        "zip_code": "ZIP code",
    }
    for field_name, label in address_fields.items():
        if not getattr(prop, field_name).strip():
            errors.append(ValidationError(field_name, f"{label} is required"))

    # Building specs
    if not 0 < prop.square_footage <= MAX_SQUARE_FOOTAGE:
        errors.append(ValidationError(
            "square_footage",
            f"Square footage must be between 1 and {MAX_SQUARE_FOOTAGE:,}",
            prop.square_footage
        ))

    if not 0 < prop.clear_height <= MAX_CLEAR_HEIGHT:
        errors.append(ValidationError(
            "clear_height",
            f"Clear height must be greater than 0 and at most {MAX_CLEAR_HEIGHT:.0f} feet",
            prop.clear_height
        ))

    if not 0 < prop.asking_rate <= MAX_ASKING_RATE:
        errors.append(ValidationError(
            "asking_rate",
            f"Asking rate must be greater than $0 and at most ${MAX_ASKING_RATE:.0f}/SF",
            prop.asking_rate
        ))

    if prop.loading_docks < 0:
        errors.append(ValidationError(
            "loading_docks",
            "Loading docks cannot be negative",
            prop.loading_docks
        ))

    if prop.office_square_footage > prop.square_footage > 0:
        warnings.append("Office square footage exceeds total square footage")

    return ValidationResult(
        is_valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )


def validate_deal(deal: Deal) -> ValidationResult:
    """Validate a lease deal."""
    errors: list[ValidationError] = []
    warnings: list[str] = []

    if not deal.deal_id:
        errors.append(ValidationError("deal_id", "Deal ID is required"))

    if not deal.title.strip():
        errors.append(ValidationError("title", "Deal title is required"))

    if not deal.prospect_id:
        errors.append(ValidationError("prospect_id", "Deal must reference a prospect"))

    if not 0 <= deal.probability <= 100:
        errors.append(ValidationError(
            "probability",
            "Probability must be between 0 and 100",
            deal.probability
        ))

    if deal.term_length <= 0:
        errors.append(ValidationError(
            "term_length",
            "Term length must be at least one month",
            deal.term_length
        ))

    if deal.value < 0:
        errors.append(ValidationError("value", "Deal value cannot be negative", deal.value))

    if deal.free_rent_months > deal.term_length > 0:
        warnings.append("Free rent period exceeds lease term")

    return ValidationResult(
        is_valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )
