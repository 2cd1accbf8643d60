from typing import Protocol


class IRpcTransport(Protocol):
    name: str

    def eth_call(self, to: str, data: str) -> str:
        """Run a read-only call against `to`; return the raw `0x` result."""
        ...
