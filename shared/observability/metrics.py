from prometheus_client import Counter, Histogram

# Business Metrics
ecomm_checkout_total = Counter(
    "ecomm_checkout_total",
    "Total checkouts processed",
    ["status"]  # Labels: 'success', 'declined', 'unrecorded'
)

ecomm_checkout_duration_seconds = Histogram(
    "ecomm_checkout_duration_seconds",
    "Checkout duration in seconds"
)

ecomm_checkout_amount = Histogram(
    "ecomm_checkout_amount",
    "Amount submitted to the payment gateway per checkout",
    buckets=(10, 25, 50, 100, 250, 500, 1000, 2500, 5000, float("inf")),
)

ecomm_order_status_updates_total = Counter(
    "ecomm_order_status_updates_total",
    "Administrative order status changes",
    ["status"]
)
