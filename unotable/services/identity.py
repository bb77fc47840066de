"""Session identity for incoming connections."""

import uuid
from typing import Optional

from unotable.services.protocol import Connection


def _uid() -> str:
    return uuid.uuid4().hex[:11]


class SessionIssuer:
    """Trusts the ids a client presents and issues fresh ones when absent.

    Clients are expected to store the ids from the ``session`` event and
    present them again on reconnect, which keeps their seat and profile.
    """

    def identify(
        self,
        connection_id: str,
        user_id: Optional[str] = None,
        session_id: Optional[str] = None,
    ) -> Connection:
        return Connection(
            connection_id=connection_id,
            user_id=user_id or _uid(),
            session_id=session_id or _uid(),
        )
