"""
Metrics — Pure-function business-logic modules.

Each module returns dictionaries or lists of dictionaries. No I/O, no side
effects, inputs are never mutated.

Modules:
    commissions — Platform commission totals, top admins, monthly trend
    orders      — Order summary cards and week-over-week growth
    rankings    — Top customers and top sellers
    stock       — Low-stock restock suggestions, inventory summary
    brands      — Per-brand product count, value and average price
    sales       — Daily sales rows, weekly revenue, sale totals
"""
