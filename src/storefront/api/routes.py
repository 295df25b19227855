"""FastAPI routes: auth, products, cart, coupons and payments.

Handlers are plain functions so FastAPI runs them in its threadpool: gateway,
cache and password-hashing calls block their own request, not the event loop.
"""

from fastapi import APIRouter, Cookie, Depends, HTTPException, Response
from protean.utils.globals import current_domain

from storefront.api.dependencies import (
    REFRESH_COOKIE,
    admin_user,
    clear_auth_cookies,
    current_user,
    get_container,
    set_auth_cookies,
)
from storefront.api.schemas import (
    AddToCartRequest,
    AuthResponse,
    CartEntryResponse,
    CartLineResponse,
    CheckoutSessionResponse,
    CheckoutSuccessRequest,
    CheckoutSuccessResponse,
    ConfigureGatewayRequest,
    CouponResponse,
    CouponValidationResponse,
    CreateCheckoutSessionRequest,
    CreateProductRequest,
    GatewayConfigResponse,
    LoginRequest,
    MessageResponse,
    ProductResponse,
    RecommendedProductResponse,
    RemoveFromCartRequest,
    SignupRequest,
    UpdateCartQuantityRequest,
    UserResponse,
    ValidateCouponRequest,
)
from storefront.cart.items import AddToCart, RemoveFromCart, UpdateCartQuantity
from storefront.cart.view import view_cart
from storefront.checkout.orchestrator import CheckoutProduct
from storefront.container import Container
from storefront.coupons.management import active_coupon, validate_coupon
from storefront.identity.user import User
from storefront.payments.gateway import FakeGateway

# ---------------------------------------------------------------------------
# Auth Router
# ---------------------------------------------------------------------------
auth_router = APIRouter(prefix="/auth", tags=["auth"])


@auth_router.post("/signup", status_code=201, response_model=AuthResponse)
def signup(
    body: SignupRequest,
    response: Response,
    container: Container = Depends(get_container),
) -> AuthResponse:
    user, pair = container.authenticator.signup(name=body.name, email=body.email, password=body.password)
    set_auth_cookies(response, pair, container.settings)
    return AuthResponse(user=UserResponse(**user.public_view()), message="User created successfully")


@auth_router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    response: Response,
    container: Container = Depends(get_container),
) -> AuthResponse:
    user, pair = container.authenticator.login(email=body.email, password=body.password)
    set_auth_cookies(response, pair, container.settings)
    return AuthResponse(user=UserResponse(**user.public_view()), message="Logged in successfully")


@auth_router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    container: Container = Depends(get_container),
    refresh_token: str | None = Cookie(default=None, alias=REFRESH_COOKIE),
) -> MessageResponse:
    container.authenticator.logout(refresh_token)
    clear_auth_cookies(response, container.settings)
    return MessageResponse(message="Logged out successfully")


@auth_router.post("/refresh-token", response_model=MessageResponse)
def refresh_token(
    response: Response,
    container: Container = Depends(get_container),
    refresh_token: str | None = Cookie(default=None, alias=REFRESH_COOKIE),
) -> MessageResponse:
    pair = container.authenticator.refresh(refresh_token)
    set_auth_cookies(response, pair, container.settings)
    return MessageResponse(message="Token refreshed successfully")


@auth_router.get("/profile", response_model=UserResponse)
def profile(user: User = Depends(current_user)) -> UserResponse:
    return UserResponse(**user.public_view())


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.get("", response_model=list[ProductResponse], dependencies=[Depends(admin_user)])
def list_products(container: Container = Depends(get_container)) -> list[ProductResponse]:
    return [ProductResponse(**product.to_dict()) for product in container.catalogue.all_products()]


@product_router.get("/featured", response_model=list[ProductResponse])
def featured_products(container: Container = Depends(get_container)) -> list[ProductResponse]:
    return [ProductResponse(**product) for product in container.catalogue.featured()]


@product_router.get("/recommendations", response_model=list[RecommendedProductResponse])
def recommended_products(container: Container = Depends(get_container)) -> list[RecommendedProductResponse]:
    return [RecommendedProductResponse(**product) for product in container.catalogue.recommended()]


@product_router.get("/category/{category}", response_model=list[ProductResponse])
def products_by_category(category: str, container: Container = Depends(get_container)) -> list[ProductResponse]:
    return [ProductResponse(**product.to_dict()) for product in container.catalogue.by_category(category)]


@product_router.post("", status_code=201, response_model=ProductResponse, dependencies=[Depends(admin_user)])
def create_product(
    body: CreateProductRequest,
    container: Container = Depends(get_container),
) -> ProductResponse:
    product = container.catalogue.create(
        name=body.name,
        description=body.description,
        price=body.price,
        category=body.category,
        image=body.image,
    )
    return ProductResponse(**product.to_dict())


@product_router.delete("/{product_id}", response_model=MessageResponse, dependencies=[Depends(admin_user)])
def delete_product(product_id: str, container: Container = Depends(get_container)) -> MessageResponse:
    container.catalogue.delete(product_id)
    return MessageResponse(message="Product deleted successfully")


@product_router.patch("/{product_id}", response_model=ProductResponse, dependencies=[Depends(admin_user)])
def toggle_featured_product(product_id: str, container: Container = Depends(get_container)) -> ProductResponse:
    product = container.catalogue.toggle_featured(product_id)
    return ProductResponse(**product.to_dict())


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=list[CartEntryResponse])
def get_cart(user: User = Depends(current_user)) -> list[CartEntryResponse]:
    return [CartEntryResponse(**entry.to_dict()) for entry in view_cart(user)]


@cart_router.post("", response_model=list[CartLineResponse])
def add_to_cart(body: AddToCartRequest, user: User = Depends(current_user)) -> list[CartLineResponse]:
    command = AddToCart(user_id=str(user.id), product_id=body.product_id)
    lines = current_domain.process(command, asynchronous=False)
    return [CartLineResponse(**line) for line in lines]


@cart_router.delete("", response_model=list[CartLineResponse])
def remove_from_cart(
    body: RemoveFromCartRequest | None = None,
    user: User = Depends(current_user),
) -> list[CartLineResponse]:
    command = RemoveFromCart(user_id=str(user.id), product_id=body.product_id if body else None)
    lines = current_domain.process(command, asynchronous=False)
    return [CartLineResponse(**line) for line in lines]


@cart_router.put("/{product_id}", response_model=list[CartLineResponse])
def update_cart_quantity(
    product_id: str,
    body: UpdateCartQuantityRequest,
    user: User = Depends(current_user),
) -> list[CartLineResponse]:
    command = UpdateCartQuantity(user_id=str(user.id), product_id=product_id, quantity=body.quantity)
    lines = current_domain.process(command, asynchronous=False)
    return [CartLineResponse(**line) for line in lines]


# ---------------------------------------------------------------------------
# Coupon Router
# ---------------------------------------------------------------------------
coupon_router = APIRouter(prefix="/coupons", tags=["coupons"])


@coupon_router.get("", response_model=CouponResponse | None)
def get_coupon(user: User = Depends(current_user)) -> CouponResponse | None:
    coupon = active_coupon(user.id)
    return CouponResponse(**coupon.to_dict()) if coupon else None


@coupon_router.post("/validate", response_model=CouponValidationResponse)
def validate(body: ValidateCouponRequest, user: User = Depends(current_user)) -> CouponValidationResponse:
    coupon = validate_coupon(body.coupon_code, user.id)
    return CouponValidationResponse(
        message="Coupon is valid",
        code=coupon.code,
        discount_percentage=coupon.discount_percentage,
    )


# ---------------------------------------------------------------------------
# Payment Router
# ---------------------------------------------------------------------------
payment_router = APIRouter(prefix="/payments", tags=["payments"])


@payment_router.post("/create-checkout-session", response_model=CheckoutSessionResponse)
def create_checkout_session(
    body: CreateCheckoutSessionRequest,
    user: User = Depends(current_user),
    container: Container = Depends(get_container),
) -> CheckoutSessionResponse:
    products = [CheckoutProduct(**product.model_dump()) for product in body.products]
    quote = container.checkout.create_session(user, products, body.coupon_code)
    return CheckoutSessionResponse(**quote.to_dict())


@payment_router.post("/checkout-success", response_model=CheckoutSuccessResponse, dependencies=[Depends(current_user)])
def checkout_success(
    body: CheckoutSuccessRequest,
    container: Container = Depends(get_container),
) -> CheckoutSuccessResponse:
    order = container.checkout.confirm(body.session_id)
    return CheckoutSuccessResponse(
        message="Payment successful, order created, and coupon deactivated if used.",
        order_id=str(order.id),
    )


@payment_router.post("/gateway/configure", response_model=GatewayConfigResponse)
def configure_gateway(
    body: ConfigureGatewayRequest,
    container: Container = Depends(get_container),
) -> GatewayConfigResponse:
    """Configure the FakeGateway behavior (non-production only)."""
    if container.settings.is_production:
        raise HTTPException(status_code=403, detail="Gateway configuration not available in production")

    gateway = container.gateway
    if not isinstance(gateway, FakeGateway):
        raise HTTPException(status_code=400, detail="Gateway configuration only available for FakeGateway")

    gateway.configure(should_succeed=body.should_succeed, failure_reason=body.failure_reason)
    return GatewayConfigResponse(
        gateway=type(gateway).__name__,
        should_succeed=gateway.should_succeed,
        failure_reason=gateway.failure_reason,
    )
