"""
API v1 routes.

Defines REST endpoints for account registration, login and the
multi-step password reset flow. Verification codes are delivered by the
notifier and never returned over HTTP.
"""

from fastapi import APIRouter, Depends, HTTPException, Response, status

from src.api.dependencies import (
    get_controller,
    get_directory,
    get_flow_registry,
    get_reset_flow,
)
from src.api.flows import ResetFlowRegistry
from src.api.models import (
    AccountResponse,
    AvailabilityResponse,
    CodeRequest,
    ErrorResponse,
    FlowStateResponse,
    LoginRequest,
    NewPasswordRequest,
    RegisterRequest,
    ResetStartRequest,
    ResetStartResponse,
)
from src.config.settings import Settings, get_settings
from src.domain.accounts import AccountLifecycleController
from src.domain.exceptions import (
    CodeExpired,
    CodeLocked,
    CodeMismatch,
    DuplicateEmail,
    DuplicateName,
    InvalidCredentials,
    InvalidTransition,
    NotVerified,
    PasswordMismatch,
    TooShort,
    UnknownEmail,
    WeakPassword,
)
from src.domain.ports import AccountDirectory

router = APIRouter(tags=["v1"])


def _unprocessable(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=detail)


def _conflicting_state() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail="Operation not allowed at this step",
    )


@router.post(
    "/register",
    response_model=AccountResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {"model": ErrorResponse, "description": "Name or email already registered"},
        422: {"model": ErrorResponse, "description": "Weak or mismatched password"},
    },
    summary="Register a new account",
    description="Create a standard account. The password must satisfy all five "
    "strength rules: length, uppercase, lowercase, number and special character.",
)
async def register(
    request_data: RegisterRequest,
    controller: AccountLifecycleController = Depends(get_controller),
) -> AccountResponse:
    """
    Register a new account.

    - **name**: Unique display name
    - **email**: Unique email address, used to sign in
    - **password** / **confirm_password**: Must match and satisfy the policy
    """
    try:
        account = controller.register(
            request_data.name,
            request_data.email,
            request_data.password,
            request_data.confirm_password,
        )
    except DuplicateName:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Name already registered",
        ) from None
    except DuplicateEmail:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email already registered",
        ) from None
    except WeakPassword as exc:
        raise _unprocessable(
            "Password does not meet requirements: " + ", ".join(exc.failed_rules)
        ) from None
    except PasswordMismatch:
        raise _unprocessable("Passwords do not match") from None
    return AccountResponse.from_account(account)


@router.post(
    "/login",
    response_model=AccountResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
        422: {"model": ErrorResponse, "description": "Password too short"},
    },
    summary="Sign in with email and password",
)
async def login(
    request_data: LoginRequest,
    controller: AccountLifecycleController = Depends(get_controller),
) -> AccountResponse:
    """Check credentials and return the account."""
    try:
        account = controller.login(request_data.email, request_data.password)
    except TooShort:
        raise _unprocessable("Password must be at least 8 characters") from None
    except InvalidCredentials:
        # Unknown email and wrong password are indistinguishable
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        ) from None
    return AccountResponse.from_account(account)


@router.get(
    "/availability",
    response_model=AvailabilityResponse,
    summary="Check whether a name or email is already registered",
)
async def availability(
    email: str | None = None,
    name: str | None = None,
    directory: AccountDirectory = Depends(get_directory),
) -> AvailabilityResponse:
    return AvailabilityResponse(
        email_taken=directory.email_exists(email) if email is not None else None,
        name_taken=directory.name_exists(name) if name is not None else None,
    )


@router.post(
    "/password-reset",
    response_model=ResetStartResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse, "description": "Email not registered"}},
    summary="Start a password reset",
    description="Send a 6-digit verification code to a registered email address "
    "and open a reset flow addressed by the returned flow id.",
)
async def start_password_reset(
    request_data: ResetStartRequest,
    registry: ResetFlowRegistry = Depends(get_flow_registry),
    settings: Settings = Depends(get_settings),
) -> ResetStartResponse:
    flow_id, controller = registry.open()
    try:
        controller.begin_reset(request_data.email)
    except UnknownEmail:
        registry.discard(flow_id)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Email not registered",
        ) from None
    registry.supersede(flow_id)
    return ResetStartResponse(
        message="Verification code sent",
        flow_id=flow_id,
        state=controller.state.value,
        expires_in_seconds=settings.code_ttl_seconds,
    )


@router.get(
    "/password-reset/{flow_id}",
    response_model=FlowStateResponse,
    responses={404: {"model": ErrorResponse, "description": "Reset flow not found"}},
    summary="Get the current step of a password reset",
)
async def get_password_reset(
    controller: AccountLifecycleController = Depends(get_reset_flow),
) -> FlowStateResponse:
    return FlowStateResponse(message="Reset in progress", state=controller.state.value)


@router.post(
    "/password-reset/{flow_id}/code",
    response_model=FlowStateResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid code"},
        404: {"model": ErrorResponse, "description": "Reset flow not found"},
        409: {"model": ErrorResponse, "description": "Flow is not awaiting a code"},
        410: {"model": ErrorResponse, "description": "Code expired"},
        423: {"model": ErrorResponse, "description": "Too many attempts"},
    },
    summary="Verify the emailed code",
)
async def submit_reset_code(
    request_data: CodeRequest,
    controller: AccountLifecycleController = Depends(get_reset_flow),
) -> FlowStateResponse:
    try:
        controller.submit_code(request_data.code)
    except CodeMismatch:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid code",
        ) from None
    except CodeExpired:
        raise HTTPException(
            status_code=status.HTTP_410_GONE,
            detail="Code expired, request a new one",
        ) from None
    except CodeLocked:
        raise HTTPException(
            status_code=status.HTTP_423_LOCKED,
            detail="Too many attempts, request a new code",
        ) from None
    except InvalidTransition:
        raise _conflicting_state() from None
    return FlowStateResponse(message="Code verified", state=controller.state.value)


@router.post(
    "/password-reset/{flow_id}/resend",
    response_model=FlowStateResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Reset flow not found"},
        409: {"model": ErrorResponse, "description": "Flow is not awaiting a code"},
    },
    summary="Send a new code, invalidating the previous one",
)
async def resend_reset_code(
    controller: AccountLifecycleController = Depends(get_reset_flow),
) -> FlowStateResponse:
    try:
        controller.resend_code()
    except InvalidTransition:
        raise _conflicting_state() from None
    return FlowStateResponse(message="Verification code sent", state=controller.state.value)


@router.post(
    "/password-reset/{flow_id}/password",
    response_model=FlowStateResponse,
    responses={
        403: {"model": ErrorResponse, "description": "Code not verified"},
        404: {"model": ErrorResponse, "description": "Reset flow or account not found"},
        422: {"model": ErrorResponse, "description": "Password too short or mismatched"},
    },
    summary="Set the new password",
    description="Requires a verified code. Only the minimum length is enforced.",
)
async def set_new_password(
    flow_id: str,
    request_data: NewPasswordRequest,
    controller: AccountLifecycleController = Depends(get_reset_flow),
    registry: ResetFlowRegistry = Depends(get_flow_registry),
) -> FlowStateResponse:
    try:
        controller.reset_password(request_data.new_password, request_data.confirm_password)
    except NotVerified:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Code not verified",
        ) from None
    except TooShort:
        raise _unprocessable("Password must be at least 8 characters") from None
    except PasswordMismatch:
        raise _unprocessable("Passwords do not match") from None
    except UnknownEmail:
        registry.discard(flow_id)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Account not found",
        ) from None

    state = controller.state.value
    registry.discard(flow_id)
    return FlowStateResponse(message="Password reset", state=state)


@router.delete(
    "/password-reset/{flow_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Cancel a password reset",
    description="Discards the flow and its code. Idempotent.",
)
async def cancel_password_reset(
    flow_id: str,
    registry: ResetFlowRegistry = Depends(get_flow_registry),
) -> Response:
    registry.discard(flow_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
