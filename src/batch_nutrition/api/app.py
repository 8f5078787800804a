"""FastAPI application factory."""

import logging
from dataclasses import asdict

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from batch_nutrition.api.schemas import CalculationOptionsPayload
from batch_nutrition.app_logging import configure_logging
from batch_nutrition.containers import AppContainer
from batch_nutrition.domain.nutrition import (
    CalculationOptions,
    InvalidCalculationOptionsError,
)
from batch_nutrition.services.labels import build_label
from batch_nutrition.services.product_nutrition import ProductNutritionNotFoundError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(logging.DEBUG if container.settings.debug else logging.INFO)

    app = FastAPI()
    app.state.container = container

    @app.exception_handler(InvalidCalculationOptionsError)
    async def invalid_options(
        request: Request, exc: InvalidCalculationOptionsError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": str(exc)},
        )

    @app.exception_handler(ProductNutritionNotFoundError)
    async def nutrition_not_found(
        request: Request, exc: ProductNutritionNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": f"No saved nutrition for product {exc}"},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/products/{product_id}/nutrition/calculate")
    async def calculate_nutrition(
        product_id: str,
        request: Request,
        payload: CalculationOptionsPayload | None = None,
    ) -> dict[str, object]:
        """Calculate nutrition from the active recipe without saving it."""
        state_container: AppContainer = request.app.state.container
        options = _resolve_options(state_container, payload)
        result = state_container.product_nutrition_service.calculate(
            product_id, options
        )
        return asdict(result)

    @app.post("/products/{product_id}/nutrition")
    async def save_nutrition(
        product_id: str,
        request: Request,
        payload: CalculationOptionsPayload | None = None,
    ) -> dict[str, object]:
        """Calculate nutrition and store the per-serving values."""
        state_container: AppContainer = request.app.state.container
        options = _resolve_options(state_container, payload)
        result, saved = state_container.product_nutrition_service.calculate_and_save(
            product_id, options
        )
        return {"calculation": asdict(result), "saved": asdict(saved)}

    @app.get("/products/{product_id}/nutrition")
    async def get_nutrition(product_id: str, request: Request) -> dict[str, object]:
        """Return the saved nutrition for a product."""
        state_container: AppContainer = request.app.state.container
        saved = state_container.product_nutrition_service.get(product_id)
        if saved is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return asdict(saved)

    @app.post("/products/{product_id}/nutrition/verify")
    async def verify_nutrition(product_id: str, request: Request) -> dict[str, object]:
        """Mark the saved nutrition for a product as verified."""
        state_container: AppContainer = request.app.state.container
        saved = state_container.product_nutrition_service.mark_verified(product_id)
        return asdict(saved)

    @app.get("/products/{product_id}/nutrition/label")
    async def nutrition_label(
        product_id: str, request: Request, optional: bool = False
    ) -> dict[str, object]:
        """Return Nutrition Facts label values for the saved nutrition."""
        state_container: AppContainer = request.app.state.container
        saved = state_container.product_nutrition_service.get(product_id)
        if saved is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return asdict(build_label(saved, include_optional=optional))

    return app


def _resolve_options(
    container: AppContainer, payload: CalculationOptionsPayload | None
) -> CalculationOptions:
    defaults = container.settings.default_options()
    if payload is None:
        return defaults
    return payload.to_options(defaults)
