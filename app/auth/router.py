from fastapi import APIRouter

from app.auth import service
from app.auth.schemas import AuthResponse, LoginRequest, MeResponse, RegisterRequest, UserResponse
from app.core.dependencies import CurrentUser, DbSession, Issuer

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(body: RegisterRequest, db: DbSession, issuer: Issuer) -> AuthResponse:
    user = await service.register_user(db, body.email, body.password)
    return AuthResponse(
        message="User created successfully",
        user=UserResponse.model_validate(user),
        token=issuer.issue(user.id, user.email),
    )


@router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest, db: DbSession, issuer: Issuer) -> AuthResponse:
    user = await service.authenticate_user(db, body.email, body.password)
    return AuthResponse(
        message="Login successful",
        user=UserResponse.model_validate(user),
        token=issuer.issue(user.id, user.email),
    )


@router.get("/me", response_model=MeResponse)
async def me(user: CurrentUser) -> MeResponse:
    return MeResponse(user=UserResponse.model_validate(user))
