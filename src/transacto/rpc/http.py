# src/transacto/rpc/http.py
from __future__ import annotations
from typing import Any, Dict, Optional
import logging
import re
import time

import requests

from transacto.errors import RpcRemoteError, RpcResponseError, RpcTransportError
from transacto.rpc.base import IRpcTransport
from transacto.settings import DEFAULT_RPC, RpcCfg

log = logging.getLogger("rpc")

REQUEST_ID = 1
_HEX_RESULT = re.compile(r"^0x[0-9a-fA-F]*$")


class HttpRpcTransport(IRpcTransport):
    """JSON-RPC 2.0 over HTTP POST. Only `eth_call` against "latest" is used."""

    name = "http"

    def __init__(
        self,
        url: str = DEFAULT_RPC,
        timeout: float = 10,
        max_retries: int = 3,
        retry_delay_s: float = 0.5,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.retry_delay_s = retry_delay_s
        self.s = session or requests.Session()

    @classmethod
    def from_settings(cls, cfg: RpcCfg, session: Optional[requests.Session] = None):
        return cls(
            url=cfg.url,
            timeout=cfg.timeout_s,
            max_retries=cfg.max_retries,
            retry_delay_s=cfg.retry_delay_s,
            session=session,
        )

    def _request(self, method: str, params: list) -> Dict[str, Any]:
        return {"jsonrpc": "2.0", "id": REQUEST_ID, "method": method, "params": params}

    def _post(self, body: Dict[str, Any]) -> requests.Response:
        # fixed delay between attempts, no backoff
        last_status: int | None = None
        for attempt in range(1, self.max_retries + 1):
            try:
                r = self.s.post(self.url, json=body, timeout=self.timeout)
                if not 200 <= r.status_code < 300:
                    raise requests.HTTPError(f"status {r.status_code}", response=r)
                return r
            except requests.RequestException as e:
                last_status = getattr(e.response, "status_code", None)
                log.warning(
                    "%s failed (attempt %d/%d, status=%s): %s",
                    body["method"],
                    attempt,
                    self.max_retries,
                    last_status,
                    e,
                )
                if attempt < self.max_retries:
                    time.sleep(self.retry_delay_s)
        raise RpcTransportError(
            f"{body['method']} to {self.url} failed after {self.max_retries} attempts",
            status=last_status,
        )

    def _result(self, r: requests.Response) -> Any:
        try:
            payload = r.json()
        except ValueError as e:
            raise RpcResponseError(f"response is not JSON: {r.text[:200]!r}") from e
        if not isinstance(payload, dict):
            raise RpcResponseError(f"unexpected JSON-RPC payload: {payload!r}")

        err = payload.get("error")
        if err is not None:
            if isinstance(err, dict):
                raise RpcRemoteError(err.get("code"), str(err.get("message", "")), err.get("data"))
            raise RpcRemoteError(None, str(err))

        if "result" not in payload:
            raise RpcResponseError(f"response missing 'result'. Keys: {list(payload)}")
        return payload["result"]

    def eth_call(self, to: str, data: str) -> str:
        body = self._request("eth_call", [{"to": to, "data": data}, "latest"])
        log.debug("eth_call to=%s data=%s", to, data)
        result = self._result(self._post(body))
        if not isinstance(result, str) or not _HEX_RESULT.fullmatch(result):
            raise RpcResponseError(f"eth_call result is not a hex string: {result!r}")
        return result.lower()

    def close(self):
        self.s.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
