# finance_analyzer/schemas/user.py
from typing import Optional
from decimal import Decimal
from pydantic import EmailStr, Field

from finance_analyzer.schemas.common import CamelModel

class LoginRequest(CamelModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

class SignupRequest(CamelModel):
    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6)
    first_name: Optional[str] = Field(None, max_length=50)
    last_name: Optional[str] = Field(None, max_length=50)

class AuthResponse(CamelModel):
    token: str
    username: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    message: str

# Fields accepted on PUT /user/profile; omitted fields are left unchanged
class UserProfileRequest(CamelModel):
    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(None, max_length=50)
    last_name: Optional[str] = Field(None, max_length=50)
    monthly_budget_limit: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    auto_categorization_enabled: Optional[bool] = None
    preferred_currency: Optional[str] = Field(None, min_length=3, max_length=10, pattern=r"^[A-Z]{3,10}$")
    notification_email_enabled: Optional[bool] = None
    notification_sms_enabled: Optional[bool] = None

class UserProfileResponse(CamelModel):
    username: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    monthly_budget_limit: Optional[Decimal] = None
    auto_categorization_enabled: bool
    preferred_currency: str
    notification_email_enabled: bool
    notification_sms_enabled: bool

class PasswordChangeRequest(CamelModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6)
