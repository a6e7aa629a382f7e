"""Cart, add-to-cart and checkout handlers."""
from .router import router, setup_dependencies

__all__ = ["router", "setup_dependencies"]
