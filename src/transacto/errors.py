class TransactoError(Exception):
    """Base class for every error raised by transacto."""


class ValidationError(TransactoError, ValueError):
    """Malformed input rejected before it reaches the codec or the network."""


class ConfigError(TransactoError):
    pass


class RpcError(TransactoError):
    pass


class RpcTransportError(RpcError):
    """Connection failure, timeout or non-2xx HTTP status after all retries."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class RpcResponseError(RpcError):
    """The node answered, but the body is not a usable JSON-RPC result."""


class RpcRemoteError(RpcError):
    """JSON-RPC `error` object returned by the node (e.g. a revert)."""

    def __init__(self, code: int | None, message: str, data=None):
        super().__init__(f"rpc error {code}: {message}")
        self.code = code
        self.rpc_message = message
        self.data = data


class DecodeError(TransactoError):
    """Short, misaligned or otherwise malformed call result."""


class OrderNotFoundError(TransactoError):
    def __init__(self, ref: str):
        super().__init__(f"order not found: {ref}")
        self.ref = ref


class PreflightError(TransactoError):
    def __init__(self, reasons: list[str]):
        super().__init__("; ".join(reasons))
        self.reasons = reasons
