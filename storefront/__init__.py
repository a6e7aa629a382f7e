"""TalkToShop storefront: cart and bank-transfer checkout."""

__version__ = "1.0.0"
