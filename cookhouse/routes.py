"""
Request Handlers

The three public POST endpoints. Each one runs
Validate -> Execute -> Notify -> Respond and stops at the first failure.

Validation happens in the request schemas; failures there are turned into
the route's 400 message by ``validation_exception_handler`` in ``main``.

The write and the email form one unit of work: the row is committed only
after the email went out, so a failed send leaves nothing behind. A send
that times out on our side may still have been accepted by the provider
just before the deadline; the recipient then gets an email for a write
that was rolled back.
"""

import asyncio
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from cookhouse.core.deps import get_dispatcher, get_hasher, get_store
from cookhouse.core.security import PasswordHasher
from cookhouse.exceptions import CookHouseError
from cookhouse.schemas import ApiResponse, LoginRequest, OrderSubmission, RegisterRequest
from cookhouse.services.notifications import NotificationDispatcher, OrderDetails
from cookhouse.services.store import StoreGateway

logger = logging.getLogger(__name__)

router = APIRouter()

REGISTER_SUCCESS = "User registered successfully!"
REGISTER_MISSING = "All fields are required."
REGISTER_FAILED = "User already exists or internal error."

LOGIN_SUCCESS = "Login successful!"
LOGIN_MISSING = "Username and password required."
LOGIN_INVALID = "Invalid username or password"
INTERNAL_ERROR = "Internal server error"
LOGIN_FAILED = INTERNAL_ERROR

ORDER_SUCCESS = "Order placed successfully!"
ORDER_MISSING = "Missing order details."
ORDER_FAILED = "Error processing order."

# Route path -> message for any request validation failure
VALIDATION_MESSAGES = {
    "/register": REGISTER_MISSING,
    "/login": LOGIN_MISSING,
    "/submit-order": ORDER_MISSING,
}

ERROR_RESPONSES = {
    400: {"model": ApiResponse},
    500: {"model": ApiResponse},
}


def envelope(status_code: int, success: bool, message: str) -> JSONResponse:
    """Build the uniform ``{success, message}`` response."""
    return JSONResponse(
        status_code=status_code,
        content=ApiResponse(success=success, message=message).model_dump(),
    )


# =============================================================================
# ACCOUNTS
# =============================================================================

@router.post(
    "/register",
    response_model=ApiResponse,
    responses=ERROR_RESPONSES,
    tags=["Accounts"],
    summary="Register a new user",
)
async def register(
    data: RegisterRequest,
    store: StoreGateway = Depends(get_store),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
    hasher: PasswordHasher = Depends(get_hasher),
) -> JSONResponse:
    """Create the account and send a welcome email."""
    try:
        password_hash = await asyncio.to_thread(hasher.hash_password, data.password)
        await store.create_user(data.username, data.email, password_hash)
        await dispatcher.send_registration_welcome(data.email, data.username)
        await store.commit()
    except CookHouseError as e:
        await store.rollback()
        logger.error(f"Registration Error ({e.kind.value}) for {data.username}: {e.message}")
        return envelope(500, False, REGISTER_FAILED)
    except Exception as e:
        await store.rollback()
        logger.exception(f"Registration Error (unknown) for {data.username}: {e}")
        return envelope(500, False, REGISTER_FAILED)

    logger.info(f"User registered: {data.username}")
    return envelope(200, True, REGISTER_SUCCESS)


@router.post(
    "/login",
    response_model=ApiResponse,
    responses={**ERROR_RESPONSES, 401: {"model": ApiResponse}},
    tags=["Accounts"],
    summary="Sign in",
)
async def login(
    data: LoginRequest,
    store: StoreGateway = Depends(get_store),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
    hasher: PasswordHasher = Depends(get_hasher),
) -> JSONResponse:
    """
    Check the credentials and send a login alert to the account's email.

    Unknown usernames and wrong passwords get the same 401 message, and both
    paths pay for one bcrypt verification.
    """
    try:
        user = await store.find_user_by_username(data.username)

        if user is None:
            await asyncio.to_thread(hasher.dummy_verify)
            logger.info(f"Login rejected: unknown user {data.username}")
            return envelope(401, False, LOGIN_INVALID)

        is_valid = await asyncio.to_thread(
            hasher.verify_password, data.password, user.password_hash
        )
        if not is_valid:
            logger.info(f"Login rejected: wrong password for {data.username}")
            return envelope(401, False, LOGIN_INVALID)

        await dispatcher.send_login_alert(user.email, data.username)
    except CookHouseError as e:
        logger.error(f"Login Error ({e.kind.value}) for {data.username}: {e.message}")
        return envelope(500, False, LOGIN_FAILED)
    except Exception as e:
        logger.exception(f"Login Error (unknown) for {data.username}: {e}")
        return envelope(500, False, LOGIN_FAILED)

    return envelope(200, True, LOGIN_SUCCESS)


# =============================================================================
# ORDERS
# =============================================================================

@router.post(
    "/submit-order",
    response_model=ApiResponse,
    responses=ERROR_RESPONSES,
    tags=["Orders"],
    summary="Submit a dish order",
)
async def submit_order(
    data: OrderSubmission,
    store: StoreGateway = Depends(get_store),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> JSONResponse:
    """Store the order and alert the operations mailbox."""
    try:
        await store.create_order(
            name=data.name,
            email=data.email,
            phone=data.phone,
            quantity=data.quantity,
            dish=data.dish,
        )
        await dispatcher.send_new_order_alert(OrderDetails(**data.model_dump()))
        await store.commit()
    except CookHouseError as e:
        await store.rollback()
        logger.error(f"Order Submission Error ({e.kind.value}): {e.message}")
        return envelope(500, False, ORDER_FAILED)
    except Exception as e:
        await store.rollback()
        logger.exception(f"Order Submission Error (unknown): {e}")
        return envelope(500, False, ORDER_FAILED)

    logger.info(f"Order placed: {data.quantity} x {data.dish} for {data.name}")
    return envelope(200, True, ORDER_SUCCESS)
