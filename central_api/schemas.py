from datetime import date, datetime
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from core.utils.documents import format_cnpj, only_digits

STATUS_VALUES = {"on", "off"}
LEVEL_VALUES = {"admin", "user"}
ORDER_STATUS_VALUES = {"pending", "processing", "completed"}
CAMPAIGN_STATUS_VALUES = {"active", "inactive", "planned"}

REQUIRED_MESSAGE = "Campo obrigatório."

# Limites das colunas dos modelos (max_length / max_digits - decimal_places).
NAME_MAX = 200
ID_MAX = 64
EMAIL_MAX = 254
PHONE_MAX = 30
MONEY_LIMIT = 10 ** 12
STOCK_LIMIT = 10 ** 11


def _require_text(value: Any) -> str:
    if value is None or not str(value).strip():
        raise ValueError(REQUIRED_MESSAGE)
    return str(value).strip()


def _optional_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _choice(value: Any, options: set, label: str = "Status") -> str:
    text = _optional_text(value)
    if text not in options:
        raise ValueError(f"{label} inválido. Opções: {sorted(options)}")
    return text


def _non_negative(value: float) -> float:
    if value < 0:
        raise ValueError("Valor não pode ser negativo")
    return value


class DocumentIn(BaseModel):
    # Chaves desconhecidas são descartadas; NaN e Infinity não são números válidos.
    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)


class DocumentOut(BaseModel):
    id: str
    created_at: Optional[Union[datetime, str]] = None
    updated_at: Optional[Union[datetime, str]] = None


class SupplierIn(DocumentIn):
    supplier_name: str = Field(max_length=NAME_MAX)
    supplier_category: str = Field("", max_length=120)
    contact_email: str = Field("", max_length=EMAIL_MAX)
    phone_number: str = Field("", max_length=PHONE_MAX)
    status: str = "on"

    @field_validator("supplier_name", mode="before")
    def require_non_empty(cls, v):
        return _require_text(v)

    @field_validator("supplier_category", "contact_email", "phone_number", mode="before")
    def optional_text(cls, v):
        return _optional_text(v)

    @field_validator("status", mode="before")
    def validate_status(cls, v):
        return _choice(v, STATUS_VALUES)


class SupplierOut(DocumentOut, SupplierIn):
    pass


class ProductIn(DocumentIn):
    name: str = Field(max_length=NAME_MAX)
    description: str
    price: float = Field(lt=MONEY_LIMIT)
    stock_quantity: float = Field(lt=STOCK_LIMIT)
    supplier_id: str = Field(max_length=ID_MAX)
    status: str = "on"

    @field_validator("name", "description", "supplier_id", mode="before")
    def require_non_empty(cls, v):
        return _require_text(v)

    @field_validator("price", "stock_quantity")
    def must_not_be_negative(cls, v):
        return _non_negative(v)

    @field_validator("status", mode="before")
    def validate_status(cls, v):
        return _choice(v, STATUS_VALUES)


class ProductOut(DocumentOut, ProductIn):
    pass


class UserIn(DocumentIn):
    name: str = Field(max_length=NAME_MAX)
    email: str = Field(max_length=EMAIL_MAX)
    username: str = Field(max_length=150)
    password: str = Field(max_length=255)
    level: str = "user"
    status: str = "on"

    @field_validator("name", "email", "username", mode="before")
    def require_non_empty(cls, v):
        return _require_text(v)

    @field_validator("password", mode="before")
    def require_password(cls, v):
        # Senha é guardada como enviada, sem strip.
        if v is None or not str(v):
            raise ValueError(REQUIRED_MESSAGE)
        return str(v)

    @field_validator("level", mode="before")
    def validate_level(cls, v):
        return _choice(v, LEVEL_VALUES, label="Nível")

    @field_validator("status", mode="before")
    def validate_status(cls, v):
        return _choice(v, STATUS_VALUES)


class UserOut(DocumentOut, UserIn):
    pass


class StoreIn(DocumentIn):
    name: str = Field(max_length=NAME_MAX)
    cnpj: str = Field(max_length=18)
    address: str = Field(max_length=255)
    phone_number: str = Field(max_length=PHONE_MAX)
    contact_email: str = Field(max_length=EMAIL_MAX)
    status: str = "on"

    @field_validator("name", "address", "phone_number", "contact_email", mode="before")
    def require_non_empty(cls, v):
        return _require_text(v)

    @field_validator("cnpj", mode="before")
    def normalize_cnpj(cls, v):
        text = _require_text(v)
        if len(only_digits(text)) == 14:
            return format_cnpj(text)
        return text

    @field_validator("status", mode="before")
    def validate_status(cls, v):
        return _choice(v, STATUS_VALUES)


class StoreOut(DocumentOut, StoreIn):
    pass


class _DealIn(DocumentIn):
    """Shape shared by orders and campaigns."""

    name: str = Field(max_length=NAME_MAX)
    start_date: date
    end_date: date
    discount: float
    store_id: str = Field(max_length=ID_MAX)
    item: str = Field(max_length=ID_MAX)
    amount: float = Field(lt=MONEY_LIMIT)

    @field_validator("name", "store_id", "item", mode="before")
    def require_non_empty(cls, v):
        return _require_text(v)

    @field_validator("start_date", "end_date", mode="before")
    def require_date(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValueError(REQUIRED_MESSAGE)
        if isinstance(v, str):
            # Aceita "2024-01-01T00:00:00.000Z" vindo de clientes JS.
            return v.strip()[:10]
        return v

    @field_validator("discount")
    def validate_discount(cls, v):
        if v < 0 or v > 100:
            raise ValueError("Desconto deve estar entre 0 e 100")
        return v

    @field_validator("amount")
    def must_not_be_negative(cls, v):
        return _non_negative(v)


class OrderIn(_DealIn):
    status: str = "pending"

    @field_validator("status", mode="before")
    def validate_status(cls, v):
        return _choice(v, ORDER_STATUS_VALUES)


class OrderOut(DocumentOut, OrderIn):
    pass


class CampaignIn(_DealIn):
    status: str = "planned"

    @field_validator("status", mode="before")
    def validate_status(cls, v):
        return _choice(v, CAMPAIGN_STATUS_VALUES)


class CampaignOut(DocumentOut, CampaignIn):
    pass


class MessageOut(BaseModel):
    message: str


def _error_text(error: dict) -> str:
    kind = error.get("type")
    ctx = error.get("ctx") or {}
    if kind == "missing":
        return REQUIRED_MESSAGE
    if kind == "string_too_long":
        return f"Máximo de {ctx.get('max_length')} caracteres."
    if kind == "less_than":
        return f"Valor deve ser menor que {ctx.get('lt')}."
    if kind == "finite_number":
        return "Número inválido."
    message = str(error.get("msg") or "")
    prefix = "Value error, "
    if message.startswith(prefix):
        message = message[len(prefix):]
    return message


def validation_message(exc: ValidationError, label: str) -> str:
    """Flatten pydantic errors into a single Portuguese message."""
    parts = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        text = _error_text(error)
        parts.append(f"{field}: {text}" if field else text)
    return f"Falha na validação de {label}: " + "; ".join(parts)
