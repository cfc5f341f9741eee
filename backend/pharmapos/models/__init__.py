from .catalog import Product, PRODUCT_FORMS
from .sales import Cart, CartLine, SaleItem, Sale, HeldSale, PAYMENT_METHODS
from .auth import User, ROLES, USER_STATUSES, STATUS_ACTIVE, STATUS_INACTIVE
from .settings import AppSetting, SETTING_GROUPS
from .audit import AuditLogEntry, ConfirmationRequest

__all__ = [
    'Product', 'PRODUCT_FORMS',
    'Cart', 'CartLine', 'SaleItem', 'Sale', 'HeldSale', 'PAYMENT_METHODS',
    'User', 'ROLES', 'USER_STATUSES', 'STATUS_ACTIVE', 'STATUS_INACTIVE',
    'AppSetting', 'SETTING_GROUPS',
    'AuditLogEntry', 'ConfirmationRequest',
]
