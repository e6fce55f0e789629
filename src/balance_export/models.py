"""Pydantic domain models for balance-export."""

from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

# ============================================================================
# Account Categories
# ============================================================================


class AccountCategory(IntEnum):
    """Account category codes used by the bookkeeping API."""

    CASH = 1
    CHECKING = 2
    CREDIT_CARD = 3
    VIRTUAL = 4
    DEBT = 5
    RECEIVABLES = 6
    INVESTMENT = 7
    SAVINGS = 8
    CERTIFICATE_OF_DEPOSIT = 9

    @property
    def label(self) -> str:
        """Human-readable name for the category."""
        return _CATEGORY_LABELS[self]


_CATEGORY_LABELS = {
    AccountCategory.CASH: "Cash",
    AccountCategory.CHECKING: "Checking Account",
    AccountCategory.CREDIT_CARD: "Credit Card",
    AccountCategory.VIRTUAL: "Virtual Account",
    AccountCategory.DEBT: "Debt Account",
    AccountCategory.RECEIVABLES: "Receivables",
    AccountCategory.INVESTMENT: "Investment Account",
    AccountCategory.SAVINGS: "Savings Account",
    AccountCategory.CERTIFICATE_OF_DEPOSIT: "Certificate of Deposit",
}


def category_label(code: int) -> str:
    """Render a raw category code, falling back to "Unknown"."""
    try:
        return AccountCategory(code).label
    except ValueError:
        return "Unknown"


# ============================================================================
# API Models
# ============================================================================


class Account(BaseModel):
    """An account as returned by the account list endpoint."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )

    id: str = ""
    name: str = ""
    parent_id: str = Field(default="", alias="parentId")
    category: int = 0
    type: int = 0
    icon: str = ""
    color: str = ""
    currency: str = ""
    balance: float = 0  # minor units, e.g. cents
    comment: str = ""
    display_order: int = Field(default=0, alias="displayOrder")
    is_asset: bool = Field(default=False, alias="isAsset")
    is_liability: bool = Field(default=False, alias="isLiability")
    hidden: bool = False
    credit_card_statement_date: int = Field(
        default=0, alias="creditCardStatementDate"
    )

    @field_validator("*", mode="before")
    @classmethod
    def null_to_default(cls, value, info: ValidationInfo):
        """Treat JSON null as the field's zero value."""
        if value is None:
            return cls.model_fields[info.field_name].get_default()
        return value

    @property
    def category_label(self) -> str:
        """Human-readable category name."""
        return category_label(self.category)


class AuthResult(BaseModel):
    """Payload of a successful authorize call."""

    token: str = ""


class AuthResponse(BaseModel):
    """Response body of ``POST /api/authorize.json``."""

    result: AuthResult = Field(default_factory=AuthResult)


class AccountListResponse(BaseModel):
    """Response body of ``GET /api/v1/accounts/list.json``."""

    result: list[Account] = Field(default_factory=list)
    success: bool = False
