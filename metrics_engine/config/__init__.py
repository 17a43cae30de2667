"""
Engine constants.

The engine never reads the environment; callers that need different values
(see admin_api.core.config) pass them as keyword arguments.
"""

# --- BUSINESS RATES ---
# Platform cut of an order total (earnings screen, payment approval).
COMMISSION_RATE = 0.10
# Seller share used by the orders screen ranking. Not derived from
# COMMISSION_RATE: the two screens carry independent constants.
SELLER_EARNINGS_SHARE = 0.90

# --- RANKINGS ---
TOP_N = 5
RECENT_COMMISSIONS_LIMIT = 10

# --- TIME WINDOWS ---
DEFAULT_TIMEZONE = "UTC"
MONTHLY_WINDOW_DAYS = 30
WEEKLY_WINDOW_DAYS = 7
TREND_MONTHS = 6
TREND_WEEKS = 6
RECENT_DAYS = 7

# es-ES short month names, as shown on the dashboard ("oct 26")
MONTH_LABELS = [
    "ene", "feb", "mar", "abr", "may", "jun",
    "jul", "ago", "sept", "oct", "nov", "dic",
]
WEEKDAY_LABELS = ["lun", "mar", "mié", "jue", "vie", "sáb", "dom"]

# --- ORDER VOCABULARY ---
PAYMENT_PENDING = "PENDING"
PAYMENT_PAID = "PAGADO"
PAYMENT_FAILED = "FALLIDO"
STATUS_CANCELED = "CANCELADO"
INTERNAL_TRANSFER = "TRANSFERENCIA_INTERNA"

# Earnings screen preset
EARNINGS_SELLER_ROLE = "admin"
# Sales screen preset
COMMISSION_SELLER_ROLES = ("admin", "seller")

# --- STOCK ---
LOW_STOCK_THRESHOLD = 10
URGENCY_LEVELS = ["critical", "warning", "low"]
UNCATEGORIZED_LABEL = "Sin categoría"
