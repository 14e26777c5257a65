#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from app.data.models.store import StoreModel
from app.data.models.cart_session import CartSessionModel
from app.data.models.product_recommendation import ProductRecommendationModel
from app.data.models.auto_discount import AutoDiscountModel

__all__ = ["StoreModel", "CartSessionModel", "ProductRecommendationModel", "AutoDiscountModel"]
