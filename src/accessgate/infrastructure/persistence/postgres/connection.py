"""Policy store connection pool."""

from psycopg_pool import AsyncConnectionPool


def create_pool(
    conninfo: str,
    min_size: int = 2,
    max_size: int = 10,
    name: str = "accessgate-policy",
) -> AsyncConnectionPool:
    """Build the pool without connecting.

    PoolLifespanMiddleware opens it at ASGI startup, so importing the app
    never touches the database.
    """
    return AsyncConnectionPool(
        conninfo=conninfo,
        min_size=min_size,
        max_size=max_size,
        name=name,
        open=False,
    )
