from dataclasses import dataclass


@dataclass(frozen=True)
class TxPayload:
    """Unsigned call payload for a state-changing contract method."""

    to: str
    data: str
    value: int = 0
    method: str = ""

    def as_dict(self) -> dict[str, str]:
        return {"to": self.to, "data": self.data, "value": hex(self.value)}
