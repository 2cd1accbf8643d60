# examples/run_fake_market.py
# ------------------------------------------------------------
# Walks the in-memory OTC contract: list orders, quote a fill, build the
# unsigned fill payload and apply it, then print the updated stats.
# ------------------------------------------------------------
from transacto.client import OtcClient
from transacto.execution.payloads import TxBuilder
from transacto.execution.preflight import Preflight
from transacto.rpc.fake import FakeOtcChain

TAKER = "0x" + "d4" * 20


def main():
    chain = FakeOtcChain.seeded()
    client = OtcClient(chain, chain.address)
    builder = TxBuilder(chain.address)

    print("=== Orders ===")
    for o in client.get_order_summaries():
        print(f"{o.order_id[:18]}.. {o.side:<4} {o.status.name:<9} {o.filled_amount}/{o.amount}")

    target = next(o for o in client.iter_order_summaries() if o.is_open)
    qty = min(10, target.remaining)
    quote = client.quote_fill(target.order_id, qty)
    print(f"\nQuote {qty} units: value={quote.value_wei} wei fee={quote.fee_wei} wei")

    pf = Preflight(client)
    pf.require(pf.check_fill(target.order_id, qty))
    tx = builder.fill_order(target.order_id, qty, value=quote.value_wei)
    print(f"fillOrder payload: {tx.as_dict()}")

    chain.execute(tx, TAKER)
    print(f"\nAfter fill: {client.platform_stats()}")


if __name__ == "__main__":
    main()
