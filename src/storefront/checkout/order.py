"""Order aggregate: an immutable record of a paid checkout.

Lines are copied from the checkout session's metadata, so prices are the ones
the customer saw at checkout, not the catalogue's current prices.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from storefront.checkout.events import OrderPlaced
from storefront.domain import storefront


@storefront.entity(part_of="Order")
class OrderLine:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)


@storefront.aggregate
class Order:
    user_id = Identifier(required=True)
    lines = HasMany(OrderLine)
    total_amount = Float(required=True, min_value=0.0)
    provider_session_id = String(required=True, max_length=255, unique=True)
    placed_at = DateTime()

    @classmethod
    def place(cls, user_id, lines, total_amount, provider_session_id):
        """Build an order from ``[{id, quantity, price}]`` line snapshots."""
        if not lines:
            raise ValidationError({"lines": ["An order needs at least one line"]})

        now = datetime.now(UTC)
        order = cls(
            user_id=user_id,
            total_amount=total_amount,
            provider_session_id=provider_session_id,
            placed_at=now,
        )
        for line in lines:
            order.add_lines(
                OrderLine(
                    product_id=line["id"],
                    quantity=line["quantity"],
                    price=line["price"],
                )
            )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                provider_session_id=provider_session_id,
                total_amount=total_amount,
                item_count=sum(line["quantity"] for line in lines),
                placed_at=now,
            )
        )
        return order
