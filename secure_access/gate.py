"""Access gate: decide per request whether a caller may see the site.

The gate is framework independent. It works on an explicit ``GateRequest``
built by the web layer and answers with a ``GateDecision``; performing the
redirect is left to the caller.
"""

import logging
from dataclasses import dataclass
from typing import Callable

logger = logging.getLogger(__name__)

LOGIN_PAGE = "login"
SIGNUP_PAGE = "signup"
EXEMPT_PAGES = frozenset({LOGIN_PAGE, SIGNUP_PAGE})


@dataclass(frozen=True)
class GateRequest:
    page: str
    authenticated: bool
    destination: str = ""  # where to send the caller after logging in


@dataclass(frozen=True)
class GateDecision:
    allowed: bool
    redirect_to: str | None = None


GatePredicate = Callable[[GateRequest], bool]


def check_access(
    page: str,
    authenticated: bool,
    destination: str = "",
    exempt_pages: frozenset[str] = EXEMPT_PAGES,
) -> GateDecision:
    """Allow the login and signup screens, otherwise require authentication."""
    if page in exempt_pages:
        return GateDecision(allowed=True)
    if not authenticated:
        return GateDecision(allowed=False, redirect_to=destination)
    return GateDecision(allowed=True)


class AccessGate:
    """Ordered list of predicates evaluated before any content handler.

    The exemption and authentication check of ``check_access`` always comes
    first. Exempt pages skip the predicates; for every other page they run
    in registration order and the first one returning False denies the
    request.
    """

    def __init__(self, exempt_pages: frozenset[str] = EXEMPT_PAGES):
        self.exempt_pages = frozenset(exempt_pages)
        self._predicates: list[GatePredicate] = []

    @property
    def predicates(self) -> list[GatePredicate]:
        return list(self._predicates)

    def add_predicate(self, predicate: GatePredicate) -> GatePredicate:
        """Append a predicate. Returns it so this can be used as a decorator."""
        self._predicates.append(predicate)
        return predicate

    def evaluate(self, request: GateRequest) -> GateDecision:
        decision = check_access(
            request.page,
            request.authenticated,
            request.destination,
            exempt_pages=self.exempt_pages,
        )
        if not decision.allowed:
            logger.debug(f"Gate denied page '{request.page}' (not logged in)")
            return decision
        if request.page in self.exempt_pages:
            return decision

        for predicate in self._predicates:
            if not predicate(request):
                logger.debug(
                    f"Gate denied page '{request.page}' "
                    f"({getattr(predicate, '__name__', predicate)!s})"
                )
                return GateDecision(allowed=False, redirect_to=request.destination)

        return GateDecision(allowed=True)
