"""Pydantic request/response schemas for the Storefront API.

These are external contracts, kept separate from the Protean commands and
aggregates they map onto.
"""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------
class SignupRequest(BaseModel):
    model_config = {
        "json_schema_extra": {"examples": [{"name": "Jane Doe", "email": "jane@example.com", "password": "s3cret!"}]}
    }

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., max_length=254)
    password: str = Field(..., max_length=128)


class LoginRequest(BaseModel):
    email: str = Field(..., max_length=254)
    password: str = Field(..., max_length=128)


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    role: str


class AuthResponse(BaseModel):
    user: UserResponse
    message: str


class MessageResponse(BaseModel):
    message: str


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Nebula Headphones",
                    "description": "Wireless noise-cancelling over-ears.",
                    "price": 129.0,
                    "category": "audio",
                    "image": "data:image/png;base64,iVBORw0KGgo...",
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    price: float = Field(..., ge=0)
    category: str = Field(..., min_length=1, max_length=100)
    image: str | None = None


class ProductResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    price: float
    image: str | None = None
    category: str
    is_featured: bool = False


class RecommendedProductResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    image: str | None = None
    price: float


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str


class RemoveFromCartRequest(BaseModel):
    product_id: str | None = None


class UpdateCartQuantityRequest(BaseModel):
    quantity: int = Field(..., ge=0)


class CartLineResponse(BaseModel):
    product_id: str
    quantity: int


class CartEntryResponse(ProductResponse):
    quantity: int


# ---------------------------------------------------------------------------
# Coupons
# ---------------------------------------------------------------------------
class ValidateCouponRequest(BaseModel):
    coupon_code: str = Field(..., min_length=1, max_length=50)


class CouponResponse(BaseModel):
    code: str
    discount_percentage: int
    expires_at: str
    is_active: bool


class CouponValidationResponse(BaseModel):
    message: str
    code: str
    discount_percentage: int


# ---------------------------------------------------------------------------
# Payments
# ---------------------------------------------------------------------------
class CheckoutProductSchema(BaseModel):
    id: str
    name: str
    price: float = Field(..., ge=0)
    quantity: int = Field(..., ge=1)
    image: str | None = None


class CreateCheckoutSessionRequest(BaseModel):
    products: list[CheckoutProductSchema] = Field(default_factory=list)
    coupon_code: str | None = None


class CheckoutSessionResponse(BaseModel):
    id: str
    total_amount: float


class CheckoutSuccessRequest(BaseModel):
    session_id: str


class CheckoutSuccessResponse(BaseModel):
    success: bool = True
    message: str
    order_id: str


class ConfigureGatewayRequest(BaseModel):
    should_succeed: bool
    failure_reason: str = "Payment provider unavailable"


class GatewayConfigResponse(BaseModel):
    gateway: str
    should_succeed: bool
    failure_reason: str
