"""Pydantic request models for the nutrition API."""

from pydantic import BaseModel

from batch_nutrition.domain.nutrition import CalculationOptions


class CalculationOptionsPayload(BaseModel):
    """Optional overrides for a nutrition calculation."""

    yield_loss_percent: float | None = None
    overrun_percent: float | None = None
    serving_size_g: float | None = None
    serving_size_description: str | None = None

    def to_options(self, defaults: CalculationOptions) -> CalculationOptions:
        """Merge the provided overrides onto default options."""
        return CalculationOptions(
            yield_loss_percent=(
                defaults.yield_loss_percent
                if self.yield_loss_percent is None
                else self.yield_loss_percent
            ),
            overrun_percent=(
                defaults.overrun_percent
                if self.overrun_percent is None
                else self.overrun_percent
            ),
            serving_size_g=(
                defaults.serving_size_g
                if self.serving_size_g is None
                else self.serving_size_g
            ),
            serving_size_description=(
                defaults.serving_size_description
                if self.serving_size_description is None
                else self.serving_size_description
            ),
        )
