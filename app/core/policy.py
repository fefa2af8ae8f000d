"""Static route-to-role access rules, evaluated before handlers run."""

from dataclasses import dataclass

from app.core.authentication import Principal
from app.core.errors import Forbidden, Unauthenticated
from app.models.user import Role


@dataclass(frozen=True)
class AccessRule:
    """
    Paths under prefix are public, or need a principal whose role is in roles.
    An empty roles set means any authenticated principal.
    """

    prefix: str
    public: bool = False
    roles: frozenset[Role] = frozenset()

    def matches(self, path: str) -> bool:
        if self.prefix == "/":
            return True
        return path == self.prefix or path.startswith(self.prefix + "/")


PUBLIC_PREFIXES = ("/auth", "/public", "/health", "/docs", "/redoc", "/openapi.json")

# First match wins; the catch-all must stay last.
ACCESS_RULES: tuple[AccessRule, ...] = (
    *(AccessRule(prefix, public=True) for prefix in PUBLIC_PREFIXES),
    AccessRule("/admin", roles=frozenset({Role.ADMIN})),
    AccessRule("/user", roles=frozenset({Role.USER})),
    AccessRule("/adminuser", roles=frozenset({Role.ADMIN, Role.USER})),
    AccessRule("/"),
)


def match_rule(path: str, rules: tuple[AccessRule, ...] = ACCESS_RULES) -> AccessRule:
    for rule in rules:
        if rule.matches(path):
            return rule
    # Unreachable with the default rules (catch-all); treat unknown as protected.
    return AccessRule("/")


def check_access(
    path: str,
    principal: Principal | None,
    rules: tuple[AccessRule, ...] = ACCESS_RULES,
) -> None:
    """Raise Unauthenticated or Forbidden if principal may not reach path."""
    rule = match_rule(path, rules)
    if rule.public:
        return
    if principal is None:
        raise Unauthenticated()
    if rule.roles and principal.role not in rule.roles:
        raise Forbidden()
