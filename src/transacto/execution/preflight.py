import logging

from transacto.client import OtcClient
from transacto.errors import OrderNotFoundError, PreflightError

log = logging.getLogger("preflight")


class Preflight:
    """Checks a prospective transaction against live contract state.

    Each `check_*` returns the list of rejection reasons (empty when the call
    would pass); `require` turns a non-empty list into a PreflightError.
    """

    def __init__(self, client: OtcClient):
        self.client = client

    def _reject(self, reasons: list[str], msg: str) -> None:
        log.warning("Rejected: %s", msg)
        reasons.append(msg)

    def _not_paused(self, reasons: list[str]) -> None:
        if self.client.is_paused():
            self._reject(reasons, "platform is paused")

    def check_post(self, amount: int) -> list[str]:
        reasons: list[str] = []
        self._not_paused(reasons)
        min_size = self.client.min_order_size()
        if amount < min_size:
            self._reject(reasons, f"amount {amount} < min order size {min_size}")
        return reasons

    def check_fill(self, order_id: str, fill_amount: int) -> list[str]:
        reasons: list[str] = []
        self._not_paused(reasons)
        try:
            o = self.client.get_order(order_id)
        except OrderNotFoundError:
            self._reject(reasons, f"order {order_id} does not exist")
            return reasons
        if not o.is_open:
            self._reject(reasons, f"order is {o.status.name}")
        elif fill_amount > o.remaining:
            self._reject(
                reasons, f"fill amount {fill_amount} > remaining {o.remaining}"
            )
        return reasons

    def check_cancel(self, order_id: str, sender: str | None = None) -> list[str]:
        reasons: list[str] = []
        self._not_paused(reasons)
        try:
            o = self.client.get_order(order_id)
        except OrderNotFoundError:
            self._reject(reasons, f"order {order_id} does not exist")
            return reasons
        if not o.is_open:
            self._reject(reasons, f"order is {o.status.name}")
        if sender is not None and sender.lower() != o.maker:
            self._reject(reasons, f"{sender} is not the maker ({o.maker})")
        return reasons

    @staticmethod
    def require(reasons: list[str]) -> None:
        if reasons:
            raise PreflightError(reasons)
