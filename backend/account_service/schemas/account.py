from pydantic import BaseModel


# Fields default to "" so missing values reach the service, which answers
# with its own ValidationError instead of FastAPI's 422 list.
class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


class ForgotRequest(BaseModel):
    email: str = ""


class UserIdResponse(BaseModel):
    message: str
    userId: int


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
