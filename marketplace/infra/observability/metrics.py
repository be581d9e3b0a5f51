from prometheus_client import Counter, Histogram


# Order Metrics
orders_placed_total = Counter("marketplace_orders_placed_total", "Total order placement attempts", ["status"])
order_value = Histogram(
    "marketplace_order_value",
    "Order value distribution",
    buckets=[10, 50, 100, 200, 500, 1000, 2000, 5000, float("inf")],
)
order_placement_duration = Histogram("marketplace_order_placement_seconds", "Order placement transaction time")
order_number_collisions_total = Counter(
    "marketplace_order_number_collisions_total", "Order numbers regenerated after a uniqueness conflict"
)

# Cart Metrics
cart_operations_total = Counter("marketplace_cart_operations_total", "Cart operations", ["operation", "status"])

# Review Metrics
review_writes_total = Counter("marketplace_review_writes_total", "Review writes", ["operation"])
