# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: repokit
"""
Entity base class and protocol.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

EntityId = int | str


@runtime_checkable
class EntityProtocol(Protocol):
    """Contract every persisted entity satisfies."""

    def get_unique_id(self) -> EntityId | None: ...


class Entity(BaseModel):
    """
    Pydantic base class for repository-managed entities.

    Declared model fields, in declaration order, are the fields persisted by
    a repository. Equality is field-wise, as for any pydantic model.
    """

    model_config = ConfigDict(extra="ignore")

    id: EntityId | None = None

    def get_unique_id(self) -> EntityId | None:
        return self.id
