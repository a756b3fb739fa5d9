from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tutelage_api.core.auth.dependencies import CurrentUser
from tutelage_api.core.auth.schemas import LoginRequest, LoginResponse, UserResponse
from tutelage_api.core.auth.service import AuthService
from tutelage_api.core.database import get_db
from tutelage_api.shared.schemas import SuccessResponse

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=SuccessResponse[LoginResponse])
async def login(
    data: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    """Authenticate a dashboard user and return an access token."""
    user, access_token = await AuthService(db).authenticate(
        email=data.email,
        password=data.password,
    )
    return SuccessResponse(
        data=LoginResponse(
            user=UserResponse.model_validate(user),
            access_token=access_token,
        ),
        message="Login successful",
    )


@router.get("/me", response_model=SuccessResponse[UserResponse])
async def get_current_user_info(current_user: CurrentUser):
    return SuccessResponse(data=UserResponse.model_validate(current_user))
