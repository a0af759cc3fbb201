"""Per-operation authorization state passed between guard and use cases."""

from dataclasses import dataclass
from enum import StrEnum

from campusrbac.domain.entities import Principal
from campusrbac.domain.exceptions import AuthorizationDenied
from campusrbac.domain.value_objects import DenialReason, Identity, Scope


class GuardState(StrEnum):
    """Lifecycle of one inbound operation through the guard."""

    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"
    SCOPE_ATTACHED = "scope_attached"
    AUTHORIZED = "authorized"
    DENIED = "denied"


@dataclass(frozen=True)
class Denial:
    """Structured denial returned to the transport layer."""

    reason: DenialReason
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"reason": self.reason.value, "message": self.message}


@dataclass(frozen=True)
class Decision:
    """Outcome of a single guard check."""

    denial: Denial | None = None

    @property
    def allowed(self) -> bool:
        return self.denial is None

    @classmethod
    def allow(cls) -> "Decision":
        return cls()

    @classmethod
    def deny(cls, reason: DenialReason, message: str) -> "Decision":
        return cls(Denial(reason, message))

    def raise_for_denial(self) -> None:
        if self.denial is not None:
            raise AuthorizationDenied(self.denial.reason, self.denial.message)


@dataclass
class AuthorizationContext:
    """Identity, freshly loaded principal and attached scope of one operation."""

    identity: Identity
    principal: Principal | None = None
    scope: Scope | None = None
    state: GuardState = GuardState.UNAUTHENTICATED
    denial: Denial | None = None

    @property
    def role(self) -> str:
        return self.principal.role if self.principal else self.identity.role

    def deny(self, denial: Denial) -> None:
        self.denial = denial
        self.scope = None
        self.state = GuardState.DENIED

    def raise_for_denial(self) -> None:
        Decision(self.denial).raise_for_denial()
