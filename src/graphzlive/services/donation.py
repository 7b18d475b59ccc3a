"""DonationService — build the UPI payment deep link.

Only the ``upi://pay`` URI is produced here; handing it to the OS is the
CLI's job, as is the printed fallback when no handler is registered.
"""

from __future__ import annotations

from graphzlive.domain.links import build_upi_uri
from graphzlive.services.analytics import AnalyticsService
from graphzlive.services.base import BaseService
from graphzlive.services.result import ServiceResult, failure
from graphzlive.services.telemetry import traced


class DonationService(BaseService):
    @traced
    def prepare(self, amount: int | None = None) -> ServiceResult:
        """Validate *amount* and return the payment URI plus manual-entry details."""
        op = "donate"
        config = self._settings.donation
        if amount is None:
            amount = config.default_amount
        if amount < config.min_amount:
            return failure(
                op,
                "INVALID_AMOUNT",
                f"Minimum donation is {config.min_amount} {config.currency}",
                min_amount=config.min_amount,
            )

        uri = build_upi_uri(
            config.upi_id,
            payee_name=config.payee_name,
            amount=amount,
            note=config.note,
            currency=config.currency,
        )
        AnalyticsService(self._workspace).track_event("donation_attempt", None, amount=amount)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "uri": uri,
                "upi_id": config.upi_id,
                "payee_name": config.payee_name,
                "amount": amount,
                "currency": config.currency,
            },
        )
