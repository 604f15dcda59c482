# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: repokit

"""
Public API for the repokit DI system.
"""

from __future__ import annotations

from repokit.di.container import Container
from repokit.di.errors import (
    CircularDependencyError,
    ContainerDisposedError,
    DIError,
    DuplicateRegistrationError,
    RestorationError,
    ScopeError,
    ServiceCreationError,
    ServiceNotRegisteredError,
)
from repokit.di.protocols import (
    ContainerProtocol,
    RestorerProtocol,
    ServiceFactoryProtocol,
    ServiceLifetime,
)
from repokit.di.registration import ServiceRegistration
from repokit.di.resolution import Scope

__all__ = [
    "CircularDependencyError",
    "Container",
    "ContainerDisposedError",
    "ContainerProtocol",
    "DIError",
    "DuplicateRegistrationError",
    "RestorationError",
    "RestorerProtocol",
    "Scope",
    "ScopeError",
    "ServiceCreationError",
    "ServiceFactoryProtocol",
    "ServiceLifetime",
    "ServiceNotRegisteredError",
    "ServiceRegistration",
]
