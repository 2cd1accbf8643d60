# Method selectors of the deployed OTC contract (first 4 bytes of keccak256
# of each signature), plus the contract-level constants the client relies on.

POST_ORDER = "0x8a4c5f2e"
FILL_ORDER = "0x3d7e849a"
CANCEL_ORDER = "0xb8c7e9d1"

GET_ORDER_VIEW = "0x7f2a1b4c"
GET_ORDER_SUMMARIES_BATCH = "0x9e3f2a1d"
GET_ORDER_IDS_LENGTH = "0x1a2b3c4e"
GET_ORDER_AT = "0x5d6e7f8a"
GET_ORDER_VIEW_BY_INDEX = "0x2b4c6e8f"
GET_ORDER_IDS = "0x9a0b1c2d"
IS_PLATFORM_PAUSED = "0x8c9d0e1f"
MIN_ORDER_SIZE = "0x1f2a3b4c"
FEE_PERCENT_BPS = "0x5d6e7f90"

VIEW_BATCH = 48  # max records per getOrderSummariesBatch call
BPS_DENOM = 10_000
PRICE_SCALE = 10**18

NAMES = {
    POST_ORDER: "postOrder",
    FILL_ORDER: "fillOrder",
    CANCEL_ORDER: "cancelOrder",
    GET_ORDER_VIEW: "getOrderView",
    GET_ORDER_SUMMARIES_BATCH: "getOrderSummariesBatch",
    GET_ORDER_IDS_LENGTH: "getOrderIdsLength",
    GET_ORDER_AT: "orderIds",
    GET_ORDER_VIEW_BY_INDEX: "getOrderViewByIndex",
    GET_ORDER_IDS: "getOrderIds",
    IS_PLATFORM_PAUSED: "paused",
    MIN_ORDER_SIZE: "minOrderSize",
    FEE_PERCENT_BPS: "feePercentBps",
}
