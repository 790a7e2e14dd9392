"""Audit logging for saved-list mutations."""

from fastapi import Request

from app.dependencies import CurrentShop
from app.utils.logging import get_logger

logger = get_logger("audit")


def audit_logged(action: str):
    """Dependency factory that logs mutating actions against a shop.

    Usage::

        @router.post("/save-list", dependencies=[Depends(audit_logged("save_list"))])
    """

    async def _log(request: Request, shop: CurrentShop) -> None:
        try:
            client_ip = request.client.host if request.client else "unknown"
            request_id = getattr(request.state, "request_id", "n/a")
            logger.info(
                "AUDIT action=%s shop=%s ip=%s request_id=%s path=%s",
                action,
                shop,
                client_ip,
                request_id,
                request.url.path,
            )
        except Exception:
            logger.warning("Failed to write audit log for action=%s", action, exc_info=True)

    return _log
