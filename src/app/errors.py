"""Error codes returned in Result errors"""

INVALID_AMOUNT = "INVALID_AMOUNT"
INSUFFICIENT_BALANCE = "INSUFFICIENT_BALANCE"
INVALID_QUANTITY = "INVALID_QUANTITY"
NOT_A_SELLER = "NOT_A_SELLER"
UNAUTHORIZED = "UNAUTHORIZED"

ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
SELLER_NOT_FOUND = "SELLER_NOT_FOUND"
ORDER_NOT_FOUND = "ORDER_NOT_FOUND"
PAYMENT_NOT_FOUND = "PAYMENT_NOT_FOUND"
WITHDRAWAL_NOT_FOUND = "WITHDRAWAL_NOT_FOUND"

GATEWAY_UNAVAILABLE = "GATEWAY_UNAVAILABLE"
GATEWAY_REJECTED = "GATEWAY_REJECTED"

# Internal guard, resolved as a no-op by settlement use cases
DUPLICATE_SETTLEMENT = "DUPLICATE_SETTLEMENT"

INVALID_STATUS_TRANSITION = "INVALID_STATUS_TRANSITION"
ORDER_NOT_COMPLETED = "ORDER_NOT_COMPLETED"
ALREADY_RATED = "ALREADY_RATED"
INVALID_RATING = "INVALID_RATING"
SELLER_ALREADY_EXISTS = "SELLER_ALREADY_EXISTS"
INVALID_OFFER = "INVALID_OFFER"

NOT_FOUND_CODES = {
    ACCOUNT_NOT_FOUND,
    SELLER_NOT_FOUND,
    ORDER_NOT_FOUND,
    PAYMENT_NOT_FOUND,
    WITHDRAWAL_NOT_FOUND,
}
