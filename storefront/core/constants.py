"""Application-wide constants and default configuration values."""

# ============== CART ==============
DEFAULT_CART_STORAGE_KEY = "talktoshop_cart"
DEFAULT_CART_CLEAR_DELAY_SECONDS = 0.5
CART_TTL_SECONDS = 30 * 86400  # 30 days for Redis-held bot carts

# ============== BACKEND ==============
DEFAULT_ORDERS_TABLE = "orders"
DEFAULT_PRODUCTS_TABLE = "products"
DEFAULT_BACKEND_TIMEOUT_SECONDS = 30.0
PRODUCT_COLUMNS = "id,name,price,image_url,vendor_id,colors,vendors(id,business_name)"

# ============== PAYMENT ==============
DEFAULT_BANK_ACCOUNT_NAME = "Abdullah Ademola Adeleke"
DEFAULT_BANK_NAME = "Opay"
DEFAULT_BANK_ACCOUNT_NUMBER = "6102308982"
DEFAULT_PAYMENT_CONTACT_URL = "https://wa.me/2349025236766"
DEFAULT_CURRENCY_SYMBOL = "₦"

# ============== DISPLAY ==============
UNKNOWN_VENDOR_LABEL = "Unknown vendor"
MAX_BUTTON_TITLE_LENGTH = 25
# Multi-unit add buttons on a product card without colors
ADD_QUANTITY_CHOICES = (2, 3)

# ============== SESSIONS ==============
# Idle shopper sessions are dropped from memory; carts stay in storage.
SESSION_CACHE_MAXSIZE = 10000
SESSION_IDLE_TTL_SECONDS = 6 * 60 * 60
