import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import JSONResponse

from ..core.exceptions import (
    AccountError,
    InvalidCredentials,
    NotFound,
    ValidationError,
)
from ..schemas.account import (
    ErrorResponse,
    ForgotRequest,
    LoginRequest,
    MessageResponse,
    UserIdResponse,
)
from ..services.accounts import AccountService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Accounts"])


def get_account_service(request: Request) -> AccountService:
    return request.app.state.accounts


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


# ------------------------------------------------
# 📝 Signup (multipart, optional profile image)
# ------------------------------------------------
@router.post(
    "/signup",
    status_code=201,
    response_model=UserIdResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def signup(
    username: str = Form(""),
    email: str = Form(""),
    password: str = Form(""),
    profile_image: Optional[UploadFile] = File(None),
    accounts: AccountService = Depends(get_account_service),
):
    try:
        user_id = accounts.register(username, email, password, profile_image)
    except ValidationError as e:
        return _error(400, e.message)
    except AccountError as e:
        # conflicts included: signup reports every failure as a 500
        logger.warning("Signup failed: %s", e.message)
        return _error(500, "Registration failed")
    except Exception:
        logger.exception("Unexpected signup failure")
        return _error(500, "Registration failed")

    return {"message": "User registered successfully", "userId": user_id}


# ------------------------------------------------
# 🔐 Login
# ------------------------------------------------
@router.post(
    "/login",
    response_model=UserIdResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
def login(body: LoginRequest, accounts: AccountService = Depends(get_account_service)):
    try:
        user_id = accounts.authenticate(body.email, body.password)
    except ValidationError as e:
        return _error(400, e.message)
    except InvalidCredentials as e:
        return _error(401, e.message)
    except AccountError as e:
        logger.warning("Login failed: %s", e.message)
        return _error(500, "Login failed")
    except Exception:
        logger.exception("Unexpected login failure")
        return _error(500, "Login failed")

    return {"message": "Login successful", "userId": user_id}


# ------------------------------------------------
# 📧 Forgot password
# ------------------------------------------------
@router.post(
    "/forgot",
    response_model=MessageResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def forgot(body: ForgotRequest, accounts: AccountService = Depends(get_account_service)):
    try:
        accounts.initiate_reset(body.email)
    except ValidationError as e:
        return _error(400, e.message)
    except NotFound as e:
        return _error(404, e.message)
    except AccountError as e:
        logger.warning("Reset request failed: %s", e.message)
        return _error(500, "Password reset failed")
    except Exception:
        logger.exception("Unexpected reset failure")
        return _error(500, "Password reset failed")

    return {"message": "Password reset initiated"}
