from collections.abc import AsyncGenerator, Callable

from fastapi import Header, HTTPException, status
from sentry_sdk import set_tag, set_user
from sqlalchemy.ext.asyncio import AsyncSession
from structlog.contextvars import bind_contextvars


def make_get_db_async(
    async_session_factory: Callable[[], AsyncSession],
) -> Callable[[], AsyncGenerator[AsyncSession, None]]:
    async def get_db() -> AsyncGenerator[AsyncSession, None]:
        async with async_session_factory() as session:
            yield session

    return get_db


def make_get_current_user_id(
    service_name: str,
    header_alias: str = "X-User-Id",
    error_status_code: int = status.HTTP_401_UNAUTHORIZED,
    error_detail: str = "X-User-Id header required",
) -> Callable[[str | None], str]:
    """Build a dependency resolving the caller id forwarded by the gateway.

    The gateway has already authenticated the request; the header value is
    trusted as-is and bound to the Sentry scope and structlog context.
    """

    def get_current_user_id(x_user_id: str | None = Header(default=None, alias=header_alias)) -> str:  # type: ignore[assignment]
        user_id = (x_user_id or "").strip()
        if not user_id:
            raise HTTPException(status_code=error_status_code, detail=error_detail)
        set_user({"id": user_id})
        set_tag("service", service_name)
        bind_contextvars(user_id=user_id)
        return user_id

    return get_current_user_id
