# Overview: Default settings registry rows seeded into every new AppState.

TAX_RATE = "tax_rate"
EXPIRY_ALERT_DAYS = "expiry_alert_days"
LOW_STOCK_LIMIT_DEFAULT = "low_stock_limit_default"

# Fallbacks used whenever a numeric setting is missing or unparseable
NUMERIC_DEFAULTS = {
    TAX_RATE: 0,
    EXPIRY_ALERT_DAYS: 90,
    LOW_STOCK_LIMIT_DEFAULT: 5,
    "default_markup_percent": 0,
}

SETTINGS_CATALOG = [
    # general
    {"key": "store_name", "value": "E-POS Pharma", "group": "general",
     "description": "Pharmacy name printed on receipts"},
    {"key": "pharmacy_license", "value": "DL-0000-LHR", "group": "general",
     "description": "Drug sale license number"},
    {"key": "store_address", "value": "Main Boulevard, Lahore", "group": "general",
     "description": "Store address"},
    {"key": "store_phone", "value": "+92 42 0000000", "group": "general",
     "description": "Contact phone"},
    {"key": "store_email", "value": "info@epos.com", "group": "general",
     "description": "Contact email"},
    {"key": "currency_symbol", "value": "PKR", "group": "general",
     "description": "Currency shown next to amounts"},
    {"key": "store_logo", "value": "", "group": "general",
     "description": "Logo URL"},
    # inventory
    {"key": EXPIRY_ALERT_DAYS, "value": "90", "group": "inventory",
     "description": "Days before expiry to flag a batch"},
    {"key": LOW_STOCK_LIMIT_DEFAULT, "value": "5", "group": "inventory",
     "description": "Low stock threshold when a product has no reorder level"},
    {"key": "default_markup_percent", "value": "20", "group": "inventory",
     "description": "Suggested markup over cost price"},
    # billing
    {"key": TAX_RATE, "value": "0", "group": "billing",
     "description": "Sales tax percentage applied at checkout"},
    {"key": "receipt_footer", "value": "Thank you for your visit. Get well soon!", "group": "billing",
     "description": "Text printed at the bottom of receipts"},
    {"key": "printer_type", "value": "thermal", "group": "billing",
     "description": "Receipt printer type"},
    {"key": "auto_print", "value": "false", "group": "billing",
     "description": "Print the receipt automatically after checkout"},
]
