import pytest

from transacto.client import OtcClient
from transacto.errors import RpcRemoteError, ValidationError
from transacto.execution.payloads import TxBuilder
from transacto.models.order import AssetType, OrderStatus
from transacto.rpc.fake import FAKE_CONTRACT, FakeOtcChain

MAKER = "0x" + "c3" * 20
TAKER = "0x" + "d4" * 20
OID = "0x" + "ab" * 32


def test_cancel_payload():
    tx = TxBuilder(FAKE_CONTRACT).cancel_order(OID)
    assert tx.to == FAKE_CONTRACT
    assert tx.data == "0xb8c7e9d1" + "ab" * 32
    assert tx.method == "cancelOrder"
    assert tx.as_dict() == {"to": FAKE_CONTRACT, "data": tx.data, "value": "0x0"}


def test_fill_payload_words():
    tx = TxBuilder(FAKE_CONTRACT).fill_order(OID, 1000, value=10)
    assert tx.data.startswith("0x3d7e849a")
    assert tx.data.endswith("0" * 61 + "3e8")
    assert tx.value == 10


def test_post_payload_layout():
    tx = TxBuilder(FAKE_CONTRACT).post_order(
        AssetType.RWA, "0x" + "11" * 32, 100, 5 * 10**17, is_sell=False
    )
    body = tx.data[10:]
    assert tx.data.startswith("0x8a4c5f2e")
    assert len(body) == 5 * 64
    assert body[:64] == "0" * 63 + "1"
    assert body[-64:] == "0" * 64


@pytest.mark.parametrize("amount", [0, -5])
def test_post_rejects_non_positive_amount(amount):
    with pytest.raises(ValidationError):
        TxBuilder(FAKE_CONTRACT).post_order(AssetType.CRYPTO, OID, amount, 1, True)


def test_builder_validates_inputs():
    with pytest.raises(ValidationError):
        TxBuilder("0x1234")
    with pytest.raises(ValidationError):
        TxBuilder(FAKE_CONTRACT).cancel_order("0xabc")


def test_payloads_execute_against_contract():
    chain = FakeOtcChain(clock=lambda: 1_700_000_000)
    b = TxBuilder(chain.address)
    c = OtcClient(chain, chain.address)

    oid = chain.execute(
        b.post_order(AssetType.RWA, "0x" + "11" * 32, 100, 5 * 10**17, True), MAKER
    )
    v = c.get_order(oid)
    assert v.maker == MAKER
    assert v.asset_id == "0x" + "11" * 32
    assert (v.amount, v.price_per_unit, v.is_sell) == (100, 5 * 10**17, True)
    assert v.created_at == 1_700_000_000

    chain.execute(b.fill_order(oid, 40), TAKER)
    assert c.get_order(oid).remaining == 60

    with pytest.raises(RpcRemoteError):
        chain.execute(b.cancel_order(oid), TAKER)

    chain.execute(b.fill_order(oid, 60), TAKER)
    assert c.get_order(oid).status == OrderStatus.FILLED

    with pytest.raises(RpcRemoteError):
        chain.execute(b.cancel_order(oid), MAKER)
