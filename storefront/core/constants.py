ORDER_STATUS_PENDING = "pending"
ORDER_STATUS_DELIVERED = "delivered"
ORDER_STATUS_CANCELLED = "cancelled"
ORDER_STATUSES = (ORDER_STATUS_PENDING, ORDER_STATUS_DELIVERED, ORDER_STATUS_CANCELLED)

DISCOUNT_WEEKLY = "weekly"
DISCOUNT_PERCENTAGE = "percentage"
DISCOUNT_FIXED = "fixed"

ORDER_REQUIRED_FIELDS = (
    "product_id",
    "customer_name",
    "customer_phone",
    "customer_location",
)

GENERIC_STORE_ERROR = "Service temporarily unavailable, please try again later."
