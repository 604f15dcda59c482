"""Domain layer for repokit.

This package contains the entity base, the change-tracking proxy and the
generic repository.
"""

from .entity import Entity, EntityId, EntityProtocol
from .errors import (
    DomainError,
    InvalidTypeNameError,
    MissingIdentityError,
    UnknownFieldError,
    UnsupportedEntityTypeError,
)
from .fields import RESERVED_FIELD_NAMES, EntityFields, FieldAccessor, entity_fields
from .naming import derive_table_name, qualified_name, table_name_for
from .protocols import RepositoryProtocol
from .proxy import EntityProxy
from .repository import Repository

__all__ = [
    # Entities
    "Entity",
    "EntityId",
    "EntityProtocol",
    "EntityFields",
    "FieldAccessor",
    "RESERVED_FIELD_NAMES",
    "entity_fields",
    # Tracking and persistence
    "EntityProxy",
    "Repository",
    "RepositoryProtocol",
    # Naming
    "derive_table_name",
    "qualified_name",
    "table_name_for",
    # Errors
    "DomainError",
    "InvalidTypeNameError",
    "MissingIdentityError",
    "UnknownFieldError",
    "UnsupportedEntityTypeError",
]
