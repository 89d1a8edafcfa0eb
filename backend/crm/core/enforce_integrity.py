"""Referential Integrity Enforcement — decides whether a mutation may proceed.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Return the CrmError to raise on violation, None on success
    - Callers pass in what they read from storage (lookups, counts, conflicts);
      the read-then-decide sequence is not atomic, unique indexes are the backstop

Design Decisions:
    - Separated from services: the async guard performs lookups, this module only
      judges them, so every rule is testable without a database
"""

from typing import Any

from crm.core.errors import (
    CrmError,
    DuplicateNameError,
    HasDependentsError,
    ReferenceNotFoundError,
)


# --- Existence ---------------------------------------------------------------

def check_reference_exists(
    referenced: dict | None, resource_type: str, resource_id: Any,
) -> CrmError | None:
    """The entity a record points to must exist."""
    if referenced is None:
        return ReferenceNotFoundError(resource_type, resource_id)
    return None


# --- Uniqueness --------------------------------------------------------------

def check_category_name_unique(conflict: dict | None) -> CrmError | None:
    """No two categories share a case-insensitive name."""
    if conflict is not None:
        return DuplicateNameError("Category with this name already exists")
    return None


def check_subcategory_name_unique(conflict: dict | None) -> CrmError | None:
    """(name, category) pair is unique; same name in another category is fine."""
    if conflict is not None:
        return DuplicateNameError(
            "A subcategory with this name already exists in the specified category",
        )
    return None


# --- Dependents --------------------------------------------------------------

def check_category_has_no_subcategories(count: int) -> CrmError | None:
    if count > 0:
        return HasDependentsError(
            "Cannot delete category with existing subcategories. "
            "Please delete subcategories first.",
            count,
        )
    return None


def check_category_has_no_customers(count: int) -> CrmError | None:
    if count > 0:
        return HasDependentsError(
            "Cannot delete category as it is being used by one or more customers",
            count,
        )
    return None


def check_subcategory_has_no_customers(count: int) -> CrmError | None:
    if count > 0:
        return HasDependentsError(
            "Cannot delete subcategory as it is being used by one or more customers",
            count,
        )
    return None


# --- Change detection --------------------------------------------------------

def reference_changed(current: dict, changes: dict, key: str) -> bool:
    """True when `changes` sets `key` to a value different from `current`."""
    return key in changes and changes[key] != current.get(key)


def name_or_parent_changed(
    current: dict, changes: dict, parent_key: str | None = None,
) -> bool:
    """Uniqueness must be re-checked when the name or its scope moves."""
    if "name" in changes and changes["name"] != current["name"]:
        return True
    return parent_key is not None and reference_changed(current, changes, parent_key)
