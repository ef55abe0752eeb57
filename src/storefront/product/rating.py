"""Rating aggregate — a customer's score and review of a product they ordered."""

from protean.fields import DateTime, Identifier, Integer, Text

from storefront.domain import storefront


@storefront.aggregate
class Rating:
    product_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    order_id = Identifier(required=True)
    rating = Integer(required=True, min_value=1, max_value=5)
    review = Text()
    created_at = DateTime()


@storefront.repository(part_of=Rating)
class RatingRepository:
    def for_product(self, product_id) -> list[Rating]:
        return self._dao.query.filter(product_id=str(product_id)).all().items
