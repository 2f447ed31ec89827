# core/security.py
import hashlib
import hmac
import math
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, FrozenSet, Optional

from core.config import get_settings

ROLE_CAPABILITIES: Dict[str, FrozenSet[str]] = {
    "administrator": frozenset({
        "read", "edit_posts", "edit_others_posts", "publish_posts",
        "delete_posts", "manage_options", "manage_categories",
    }),
    "editor": frozenset({
        "read", "edit_posts", "edit_others_posts", "publish_posts",
        "delete_posts", "manage_categories",
    }),
    "author": frozenset({"read", "edit_posts", "publish_posts", "delete_posts"}),
    "contributor": frozenset({"read", "edit_posts"}),
    "subscriber": frozenset({"read"}),
}


@dataclass(frozen=True)
class Identity:
    """The user a request acts as"""
    user_id: int = 0
    role: Optional[str] = None
    session_token: str = ""
    capabilities: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def for_role(cls, user_id: int, role: str, session_token: str = "") -> "Identity":
        return cls(user_id=user_id, role=role, session_token=session_token,
                   capabilities=ROLE_CAPABILITIES.get(role, frozenset()))

    @classmethod
    def anonymous(cls) -> "Identity":
        return cls()

    @property
    def is_logged_in(self) -> bool:
        return self.user_id > 0

    def can(self, capability: str, owner_id: Optional[int] = None) -> bool:
        """Check a capability.

        ``edit_post`` is resolved against the owner of the record: editing your
        own record needs ``edit_posts``, anyone else's needs ``edit_others_posts``.
        """
        if capability == "edit_post":
            if owner_id is None or owner_id == self.user_id:
                return "edit_posts" in self.capabilities
            return "edit_others_posts" in self.capabilities
        return capability in self.capabilities


class NonceManager:
    """Time-limited, per-user, per-action tokens for form submissions"""

    def __init__(self, secret: Optional[str] = None, lifetime: Optional[int] = None,
                 clock: Callable[[], float] = time.time):
        settings = get_settings()
        self.secret = (secret or settings.nonce_secret).encode()
        self.lifetime = lifetime or settings.nonce_lifetime
        self.clock = clock

    def tick(self) -> int:
        return math.ceil(self.clock() / (self.lifetime / 2))

    def _hash(self, tick: int, action: str, identity: Identity) -> str:
        message = f"{tick}|{action}|{identity.user_id}|{identity.session_token}".encode()
        return hmac.new(self.secret, message, hashlib.sha256).hexdigest()[-12:-2]

    def create(self, action: str, identity: Identity) -> str:
        return self._hash(self.tick(), action, identity)

    def verify(self, nonce: Optional[str], action: str, identity: Identity) -> int:
        """Return 1 for a nonce from the current half-life, 2 for the previous one, 0 if invalid"""
        if not nonce:
            return 0
        tick = self.tick()
        if hmac.compare_digest(self._hash(tick, action, identity), nonce):
            return 1
        if hmac.compare_digest(self._hash(tick - 1, action, identity), nonce):
            return 2
        return 0
