from .setup import setup_observability
from .metrics import (
    ecomm_checkout_total,
    ecomm_checkout_duration_seconds,
    ecomm_checkout_amount,
    ecomm_order_status_updates_total,
)
