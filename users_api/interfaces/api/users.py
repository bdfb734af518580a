"""Users API routes — signup, login, logout, verification, subscription, deletion."""

from fastapi import APIRouter, Depends, status

from users_api.application.services.auth_service import CredentialService
from users_api.domain.models.user import User
from users_api.domain.schemas.user import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    SignupRequest,
    SignupResponse,
    SubscriptionResponse,
    SubscriptionUpdate,
    UserPublic,
    UserRead,
    VerifyEmailRequest,
)
from users_api.interfaces.api.deps import get_current_user, require_admin_key, require_owner
from users_api.interfaces.deps import get_credential_service

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
def signup(body: SignupRequest, service: CredentialService = Depends(get_credential_service)):
    user = service.signup(body.email, body.password)
    return SignupResponse(user=UserPublic.model_validate(user))


@router.post("/login", response_model=LoginResponse)
def login(body: LoginRequest, service: CredentialService = Depends(get_credential_service)):
    token, user = service.login(body.email, body.password)
    return LoginResponse(token=token, user=UserPublic.model_validate(user))


@router.get("/logout", response_model=MessageResponse)
def logout(
    user: User = Depends(get_current_user),
    service: CredentialService = Depends(get_credential_service),
):
    service.logout(user.id)
    return MessageResponse(message="User has been logged out successfully")


@router.get("/current", response_model=UserPublic)
def current(user: User = Depends(get_current_user)):
    return UserPublic.model_validate(user)


@router.get("/verify/{verification_token}", response_model=MessageResponse)
def verify_email(
    verification_token: str,
    service: CredentialService = Depends(get_credential_service),
):
    service.confirm_verification(verification_token)
    return MessageResponse(message="Verification successful")


@router.post("/verify", response_model=MessageResponse)
def resend_verification(
    body: VerifyEmailRequest,
    service: CredentialService = Depends(get_credential_service),
):
    service.request_verification(body.email)
    return MessageResponse(message="Verification email sent")


@router.delete(
    "/delete/{email}",
    response_model=MessageResponse,
    dependencies=[Depends(require_admin_key)],
)
def delete_user(email: str, service: CredentialService = Depends(get_credential_service)):
    service.delete_user(email)
    return MessageResponse(message="User deleted successfully")


@router.patch("/{user_id}", response_model=SubscriptionResponse)
def update_subscription(
    user_id: str,
    body: SubscriptionUpdate,
    user: User = Depends(require_owner),
    service: CredentialService = Depends(get_credential_service),
):
    updated = service.update_subscription(user.id, body.subscription)
    return SubscriptionResponse(
        message="Subscription updated successfully!",
        user=UserRead.model_validate(updated),
    )
