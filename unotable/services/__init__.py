"""Collaborators of the orchestrator: identity, profiles and broadcasting."""

from unotable.services.identity import SessionIssuer
from unotable.services.profiles import InMemoryProfileStore, SqliteProfileStore, generate_name
from unotable.services.protocol import (
    BroadcastChannel,
    Connection,
    IdentityProvider,
    Profile,
    ProfileStore,
)

__all__ = [
    "SessionIssuer",
    "InMemoryProfileStore",
    "SqliteProfileStore",
    "generate_name",
    "BroadcastChannel",
    "Connection",
    "IdentityProvider",
    "Profile",
    "ProfileStore",
]
