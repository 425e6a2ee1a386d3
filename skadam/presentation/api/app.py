"""
FastAPI staff/admin surface over the stores and the settlement use case
"""

import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from skadam import __version__
from skadam.application.dtos.settlement_dtos import SettlementRequest
from skadam.application.stores.base_store import domain_validation
from skadam.domain.entities.catalog_entity import InventorySettingsPatch, MenuItemPatch
from skadam.domain.entities.loyalty_entity import LoyaltySettingsPatch
from skadam.domain.entities.notification_entity import NotificationSettingsPatch
from skadam.domain.entities.order_entity import OrderStatus
from skadam.domain.entities.store_entity import (
    OpeningHours,
    SocialMediaLinkPatch,
    StoreSettingsPatch,
)
from skadam.domain.value_objects.money import Money
from skadam.infrastructure.container.dependency_injection import DependencyContainer
from skadam.infrastructure.utilities.constants import ErrorCodes
from skadam.infrastructure.utilities.exceptions import (
    BusinessLogicError,
    CustomerNotFoundError,
    SkadamError,
    ValidationError,
)
from skadam.presentation.api.schemas import (
    CategoryCreate,
    CustomerCreate,
    InventoryQuantityUpdate,
    InventorySettingsUpdate,
    LoginRequest,
    LoyaltySettingsUpdate,
    MenuItemCreate,
    MenuItemUpdate,
    NotificationSettingsUpdate,
    OpeningHoursIn,
    OrderCreate,
    PromoCodeCreate,
    QuizAttemptCreate,
    RedeemBody,
    SettleBody,
    SocialLinkCreate,
    SocialLinkUpdate,
    StatusUpdate,
    StoreSettingsUpdate,
    SubUserCreate,
)

logger = logging.getLogger(__name__)


def get_container(request: Request) -> DependencyContainer:
    return request.app.state.container


def _not_found(kind: str, identifier: str) -> BusinessLogicError:
    return BusinessLogicError(
        f"{kind} not found: {identifier}",
        f"{kind} not found. Please refresh and try again.",
        ErrorCodes.NOT_FOUND,
    )


def _opening_hours(entries: List[OpeningHoursIn]) -> List[OpeningHours]:
    with domain_validation("opening_hours"):
        return [OpeningHours(**entry.model_dump()) for entry in entries]


def _status_code_for(error: SkadamError) -> int:
    if isinstance(error, ValidationError):
        return 422
    if error.error_code == ErrorCodes.NOT_FOUND:
        return 404
    return 400


def create_app(container: DependencyContainer) -> FastAPI:
    """Build the API; the container is loaded on start-up and shut down on exit"""

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        container.load()
        yield
        container.shutdown()

    app = FastAPI(title="SKADAM Café", version=__version__, lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(SkadamError)
    async def handle_skadam_error(_request: Request, exc: SkadamError):
        status_code = _status_code_for(exc)
        logger.warning("⚠️ Request rejected (%d): %s", status_code, exc)
        return JSONResponse(
            status_code=status_code,
            content={"error_code": exc.error_code, "message": exc.user_message},
        )

    @app.get("/health")
    def health(c: DependencyContainer = Depends(get_container)):
        body = {
            "status": "ok",
            "version": __version__,
            "storage": type(c.get_storage()).__name__,
            "persistence_failures": c.get_writer().failure_count,
        }
        db_manager = c.get_db_manager()
        if db_manager is not None:
            body["database"] = db_manager.health_check()
            if body["database"]["status"] != "healthy":
                body["status"] = "degraded"
        return body

    # Menu

    @app.get("/menu/items")
    def list_menu_items(
        category_id: Optional[str] = None,
        popular: bool = False,
        c: DependencyContainer = Depends(get_container),
    ):
        catalog = c.get_catalog_store()
        items = catalog.list_popular() if popular else catalog.list_items(category_id)
        return [item.to_dict() for item in items]

    @app.post("/menu/items", status_code=201)
    def create_menu_item(body: MenuItemCreate, c: DependencyContainer = Depends(get_container)):
        item = c.get_catalog_store().add_item(
            name=body.name,
            description=body.description,
            price=Money(body.price, c.settings.currency),
            category_id=body.category_id,
            image=body.image,
            popular=body.popular,
            ingredients=body.ingredients,
        )
        return item.to_dict()

    @app.patch("/menu/items/{item_id}")
    def update_menu_item(
        item_id: str, body: MenuItemUpdate, c: DependencyContainer = Depends(get_container)
    ):
        changes = body.model_dump(exclude_unset=True)
        if changes.get("price") is not None:
            changes["price"] = Money(changes["price"], c.settings.currency)
        item = c.get_catalog_store().update_item(item_id, MenuItemPatch(**changes))
        if item is None:
            raise _not_found("Menu item", item_id)
        return item.to_dict()

    @app.delete("/menu/items/{item_id}")
    def delete_menu_item(item_id: str, c: DependencyContainer = Depends(get_container)):
        if not c.get_catalog_store().delete_item(item_id):
            raise _not_found("Menu item", item_id)
        return {"deleted": True}

    @app.put("/menu/items/{item_id}/inventory")
    def set_inventory_quantity(
        item_id: str, body: InventoryQuantityUpdate, c: DependencyContainer = Depends(get_container)
    ):
        item = c.get_catalog_store().set_inventory_quantity(item_id, body.quantity)
        if item is None:
            raise _not_found("Menu item", item_id)
        return item.to_dict()

    @app.put("/menu/items/{item_id}/inventory/settings")
    def set_inventory_settings(
        item_id: str, body: InventorySettingsUpdate, c: DependencyContainer = Depends(get_container)
    ):
        patch = InventorySettingsPatch(
            alert_enabled=body.alert_enabled,
            alert_threshold=body.alert_threshold,
            unit=body.unit,
        )
        item = c.get_catalog_store().set_inventory_settings(item_id, patch)
        if item is None:
            raise _not_found("Menu item", item_id)
        return item.to_dict()

    @app.get("/menu/low-stock")
    def list_low_stock(c: DependencyContainer = Depends(get_container)):
        return [item.to_dict() for item in c.get_catalog_store().list_low_stock()]

    @app.get("/categories")
    def list_categories(c: DependencyContainer = Depends(get_container)):
        return [category.to_dict() for category in c.get_catalog_store().list_categories()]

    @app.post("/categories", status_code=201)
    def create_category(body: CategoryCreate, c: DependencyContainer = Depends(get_container)):
        category = c.get_catalog_store().add_category(
            body.name, body.description, body.image, body.color
        )
        return category.to_dict()

    # Orders

    @app.get("/orders")
    def list_orders(
        status: Optional[OrderStatus] = None, c: DependencyContainer = Depends(get_container)
    ):
        return [order.to_dict() for order in c.get_order_store().list_orders(status)]

    @app.post("/orders", status_code=201)
    def create_order(body: OrderCreate, c: DependencyContainer = Depends(get_container)):
        catalog = c.get_catalog_store()
        lines = [catalog.snapshot_line(line.menu_item_id, line.quantity) for line in body.lines]
        order = c.get_order_store().create_order(lines, body.table_number, body.customer_note)
        return order.to_dict()

    @app.patch("/orders/{order_id}/status")
    def update_order_status(
        order_id: str, body: StatusUpdate, c: DependencyContainer = Depends(get_container)
    ):
        order = c.get_order_store().update_status(order_id, body.status)
        if order is None:
            raise _not_found("Order", order_id)
        return order.to_dict()

    @app.delete("/orders/{order_id}")
    def delete_order(order_id: str, c: DependencyContainer = Depends(get_container)):
        if not c.get_order_store().delete_order(order_id):
            raise _not_found("Order", order_id)
        return {"deleted": True}

    @app.post("/orders/clear-paid")
    def clear_paid_orders(c: DependencyContainer = Depends(get_container)):
        return {"removed": c.get_order_store().clear_paid_orders()}

    @app.get("/orders/report")
    def sales_report(c: DependencyContainer = Depends(get_container)):
        return c.get_order_store().sales_report().to_dict()

    @app.post("/orders/{order_id}/settle")
    def settle_order(order_id: str, body: SettleBody, c: DependencyContainer = Depends(get_container)):
        request = SettlementRequest(
            order_id=order_id, phone_number=body.phone_number, promo_code=body.promo_code
        )
        return c.get_settlement_use_case().settle(request).to_dict()

    # Loyalty

    @app.get("/loyalty/customers")
    def list_customers(c: DependencyContainer = Depends(get_container)):
        return [customer.to_dict() for customer in c.get_loyalty_store().list_customers()]

    @app.post("/loyalty/customers", status_code=201)
    def create_customer(body: CustomerCreate, c: DependencyContainer = Depends(get_container)):
        return c.get_loyalty_store().add_customer(body.name, body.phone_number).to_dict()

    @app.get("/loyalty/customers/by-phone/{phone_number}")
    def find_customer(phone_number: str, c: DependencyContainer = Depends(get_container)):
        customer = c.get_loyalty_store().find_by_phone(phone_number)
        if customer is None:
            raise _not_found("Customer", phone_number)
        return customer.to_dict()

    @app.get("/loyalty/customers/{customer_id}/transactions")
    def customer_transactions(customer_id: str, c: DependencyContainer = Depends(get_container)):
        loyalty = c.get_loyalty_store()
        if loyalty.get_customer(customer_id) is None:
            raise CustomerNotFoundError(customer_id)
        return [entry.to_dict() for entry in loyalty.transactions_for(customer_id)]

    @app.post("/loyalty/customers/{customer_id}/redeem")
    def redeem_points(
        customer_id: str, body: RedeemBody, c: DependencyContainer = Depends(get_container)
    ):
        loyalty = c.get_loyalty_store()
        if loyalty.get_customer(customer_id) is None:
            raise CustomerNotFoundError(customer_id)
        if not loyalty.redeem_points(customer_id, body.order_id, body.points):
            raise BusinessLogicError(
                f"Redemption of {body.points} points refused for {customer_id}",
                "Not enough points for this redemption.",
            )
        return loyalty.get_customer(customer_id).to_dict()

    @app.delete("/loyalty/customers/{customer_id}")
    def delete_customer(customer_id: str, c: DependencyContainer = Depends(get_container)):
        if not c.get_loyalty_store().delete_customer(customer_id):
            raise CustomerNotFoundError(customer_id)
        return {"deleted": True}

    @app.get("/loyalty/settings")
    def loyalty_settings(c: DependencyContainer = Depends(get_container)):
        return c.get_loyalty_store().settings.to_dict()

    @app.patch("/loyalty/settings")
    def update_loyalty_settings(
        body: LoyaltySettingsUpdate, c: DependencyContainer = Depends(get_container)
    ):
        patch = LoyaltySettingsPatch(**body.model_dump(exclude_unset=True))
        return c.get_loyalty_store().update_settings(patch).to_dict()

    # Promotions and quiz

    @app.get("/promo-codes")
    def list_promo_codes(c: DependencyContainer = Depends(get_container)):
        return [promo.to_dict() for promo in c.get_promotion_store().list_promo_codes()]

    @app.post("/promo-codes", status_code=201)
    def create_promo_code(body: PromoCodeCreate, c: DependencyContainer = Depends(get_container)):
        promo = c.get_promotion_store().create_promo_code(
            code=body.code,
            discount_percentage=body.discount_percentage,
            description=body.description,
            max_usage=body.max_usage,
            expires_at=body.expires_at,
        )
        return promo.to_dict()

    @app.get("/promo-codes/{code}/validate")
    def validate_promo_code(code: str, c: DependencyContainer = Depends(get_container)):
        promo = c.get_promotion_store().validate(code)
        return {"valid": promo is not None, "promo_code": promo.to_dict() if promo else None}

    @app.delete("/promo-codes/{promo_id}")
    def delete_promo_code(promo_id: str, c: DependencyContainer = Depends(get_container)):
        if not c.get_promotion_store().delete_promo_code(promo_id):
            raise _not_found("Promo code", promo_id)
        return {"deleted": True}

    @app.get("/quiz/questions")
    def quiz_questions(c: DependencyContainer = Depends(get_container)):
        # Answers stay server-side
        return [
            {"id": q.id, "question": q.question, "options": q.options}
            for q in c.get_quiz_store().active_questions()
        ]

    @app.post("/quiz/attempts", status_code=201)
    def submit_quiz_attempt(body: QuizAttemptCreate, c: DependencyContainer = Depends(get_container)):
        quiz = c.get_quiz_store()
        total = len(quiz.active_questions())
        attempt = quiz.submit_attempt(body.user_id, quiz.score_answers(body.answers), total)
        return attempt.to_dict()

    # Staff and settings

    @app.post("/auth/login")
    def login(body: LoginRequest, c: DependencyContainer = Depends(get_container)):
        staff = c.get_staff_store()
        if body.username:
            user = staff.authenticate(body.username, body.password)
            if user is None:
                raise BusinessLogicError("Invalid credentials", "Invalid username or password.")
            return {"role": "staff", "user": user.to_dict(include_secret=False)}
        if not staff.authenticate_admin(body.password):
            raise BusinessLogicError("Invalid admin password", "Invalid password.")
        return {"role": "admin"}

    @app.get("/staff/sub-users")
    def list_sub_users(c: DependencyContainer = Depends(get_container)):
        return [user.to_dict(include_secret=False) for user in c.get_staff_store().list_sub_users()]

    @app.post("/staff/sub-users", status_code=201)
    def create_sub_user(body: SubUserCreate, c: DependencyContainer = Depends(get_container)):
        user = c.get_staff_store().add_sub_user(body.username, body.password, body.name)
        return user.to_dict(include_secret=False)

    @app.delete("/staff/sub-users/{user_id}")
    def delete_sub_user(user_id: str, c: DependencyContainer = Depends(get_container)):
        if not c.get_staff_store().delete_sub_user(user_id):
            raise _not_found("Sub-user", user_id)
        return {"deleted": True}

    @app.patch("/notifications/settings")
    def update_notification_settings(
        body: NotificationSettingsUpdate, c: DependencyContainer = Depends(get_container)
    ):
        patch = NotificationSettingsPatch(**body.model_dump(exclude_unset=True))
        return c.get_notifier().update_settings(patch).to_dict()

    # Store profile

    @app.get("/store/settings")
    def store_settings(c: DependencyContainer = Depends(get_container)):
        return c.get_store_settings_store().settings.to_dict()

    @app.patch("/store/settings")
    def update_store_settings(
        body: StoreSettingsUpdate, c: DependencyContainer = Depends(get_container)
    ):
        patch = StoreSettingsPatch(store_description=body.store_description)
        if body.opening_hours is not None:
            patch.opening_hours = _opening_hours(body.opening_hours)
        return c.get_store_settings_store().update_settings(patch).to_dict()

    @app.put("/store/settings/opening-hours")
    def replace_opening_hours(
        body: List[OpeningHoursIn], c: DependencyContainer = Depends(get_container)
    ):
        store = c.get_store_settings_store()
        return store.update_opening_hours(_opening_hours(body)).to_dict()

    @app.post("/store/settings/social-links", status_code=201)
    def add_social_link(body: SocialLinkCreate, c: DependencyContainer = Depends(get_container)):
        link = c.get_store_settings_store().add_social_link(body.platform, body.url, body.is_active)
        return link.to_dict()

    @app.patch("/store/settings/social-links/{link_id}")
    def update_social_link(
        link_id: str, body: SocialLinkUpdate, c: DependencyContainer = Depends(get_container)
    ):
        patch = SocialMediaLinkPatch(**body.model_dump(exclude_unset=True))
        link = c.get_store_settings_store().update_social_link(link_id, patch)
        if link is None:
            raise _not_found("Social link", link_id)
        return link.to_dict()

    @app.delete("/store/settings/social-links/{link_id}")
    def delete_social_link(link_id: str, c: DependencyContainer = Depends(get_container)):
        if not c.get_store_settings_store().delete_social_link(link_id):
            raise _not_found("Social link", link_id)
        return {"deleted": True}

    return app
