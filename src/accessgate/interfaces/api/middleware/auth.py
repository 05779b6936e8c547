"""Auth middleware - identifies the caller, never decides access."""

from dataclasses import dataclass

import falcon.asgi

ACTOR_HEADER = "X-Actor-Id"


@dataclass
class RequestUser:
    """Caller identity from request context."""

    user_id: str
    email: str | None = None
    username: str | None = None


class AuthMiddleware:
    """Sets req.context.user from a bearer token or, without Keycloak, a trusted header.

    The header mode is for development and for deployments behind a gateway
    that has already authenticated the caller.
    """

    def __init__(self, keycloak_provider=None) -> None:
        self._keycloak = keycloak_provider

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Resolve the caller from the Authorization or X-Actor-Id header."""
        req.context.user = None
        if self._keycloak:
            auth = req.get_header("Authorization")
            if auth and auth.startswith("Bearer "):
                user = self._keycloak.decode_token(auth[7:])
                if user:
                    req.context.user = RequestUser(
                        user_id=user.user_id,
                        email=user.email,
                        username=user.username,
                    )
            return

        actor_id = (req.get_header(ACTOR_HEADER) or "").strip()
        if actor_id:
            req.context.user = RequestUser(user_id=actor_id)
