"""Acting account threaded through every mutating use case"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ActorContext:
    """
    Authenticated caller

    Built by the API layer from the authenticated session. Use cases derive
    mutation targets from it instead of trusting request bodies.
    """
    account_id: str
    is_admin: bool = False
