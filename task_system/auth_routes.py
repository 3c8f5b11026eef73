from fastapi import APIRouter, Depends

from task_system.auth_service import AuthenticationService
from task_system.dependencies import get_auth_service
from task_system.schemas import JwtTokenResponse, SignInRequest, SignUpRequest

router = APIRouter(prefix="/auth", tags=["auth"])

# endpoints kept from the first public revision of the API
legacy_router = APIRouter(prefix="/user", tags=["auth"], include_in_schema=False)


@router.post("/signup", response_model=JwtTokenResponse)
@legacy_router.post("/signUp", response_model=JwtTokenResponse)
def sign_up(payload: SignUpRequest, auth: AuthenticationService = Depends(get_auth_service)):
    token = auth.sign_up(payload.email, payload.username, payload.password)
    return JwtTokenResponse(token=token)


@router.post("/signin", response_model=JwtTokenResponse)
@legacy_router.post("/signIn", response_model=JwtTokenResponse)
def sign_in(payload: SignInRequest, auth: AuthenticationService = Depends(get_auth_service)):
    token = auth.sign_in(payload.email, payload.password)
    return JwtTokenResponse(token=token)
