"""HTTP API serving the largest recent balance change.

Usage:
    uvicorn balance_change.api:create_app --factory
"""

from fastapi import Depends, FastAPI, HTTPException, Request, status

from balance_change.blocks.models import RecentBalanceChange
from balance_change.helpers.config import Settings
from balance_change.helpers.errors import QueryFailedError
from balance_change.service import BalanceChangeService


def get_service(request: Request) -> BalanceChangeService:
    """Service instance attached to the running app."""
    return request.app.state.service


def create_app(service: BalanceChangeService | None = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        service: Query service, built from the environment if omitted

    Raises:
        ValueError: If the environment configuration is invalid
    """
    app = FastAPI(title="Largest Balance Change API")
    app.state.service = service or BalanceChangeService(Settings.from_env())

    @app.get("/block/largest-balance-change", response_model=RecentBalanceChange)
    async def get_largest_recent_balance_change(
        service: BalanceChangeService = Depends(get_service),
    ) -> RecentBalanceChange:
        try:
            return await service.get_largest_recent_balance_change()
        except QueryFailedError as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error"
            ) from e

    return app


__all__ = ["create_app", "get_service"]
