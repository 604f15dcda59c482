# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: repokit
"""
Collection name derivation for entity types.
"""

from __future__ import annotations

from repokit.domain.errors import InvalidTypeNameError

NAMESPACE_SEPARATOR = "."


def derive_table_name(type_name: str) -> str:
    """Derive the default collection name from a fully-qualified type name.

    The simple name after the last separator is returned with its first
    character lower-cased, e.g. ``"shop.models.UserProfile"`` becomes
    ``"userProfile"``.

    Args:
        type_name: Fully-qualified type name

    Returns:
        The derived collection name

    Raises:
        InvalidTypeNameError: If the name is not fully qualified
    """
    _, separator, simple_name = type_name.rpartition(NAMESPACE_SEPARATOR)
    if not separator or not simple_name or type_name.startswith(NAMESPACE_SEPARATOR):
        raise InvalidTypeNameError(type_name)
    return simple_name[0].lower() + simple_name[1:]


def qualified_name(entity_type: type) -> str:
    """Return ``module.QualName`` for a type."""
    return f"{entity_type.__module__}{NAMESPACE_SEPARATOR}{entity_type.__qualname__}"


def table_name_for(entity_type: type) -> str:
    """Derive the default collection name for an entity type."""
    return derive_table_name(qualified_name(entity_type))
