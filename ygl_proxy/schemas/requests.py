"""Request bodies accepted by the proxy endpoints.

Each endpoint validates its JSON body into one of these models before doing
anything else. Integers and booleans are strict (``"3"`` is not a valid
``beds_min``, ``2.5`` is not either, ``2.0`` is), unknown keys are dropped
and an explicit ``null`` is the same as leaving a field out.

On failure ``validate_request`` raises ``ValidationError`` with one entry per
offending field so the client can point at the exact input.
"""

from __future__ import annotations

from datetime import date
from typing import Annotated, Any, Dict, List, Literal, Optional, Type, TypeVar

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    EmailStr,
    Field,
    StrictBool,
    StrictInt,
    StrictStr,
    field_validator,
)
from pydantic import ValidationError as PydanticValidationError

from ygl_proxy.error_handler import ValidationError

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"

FeeFilter = Literal["any", "no_fee", "fee"]
RentalOrder = Literal["rent_asc", "rent_desc", "date_desc", "date_asc"]


def _whole_number(v: Any) -> Any:
    # JSON has a single number type, so 2.0 counts as the integer 2.
    if isinstance(v, float) and v.is_integer():
        return int(v)
    return v


WholeInt = Annotated[StrictInt, BeforeValidator(_whole_number)]


class ProxyRequest(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    def compact(self) -> Dict[str, Any]:
        """Validated fields in declaration order, absent ones dropped."""
        return self.model_dump(exclude_none=True)


class PaginatedRequest(ProxyRequest):
    page: WholeInt = Field(default=1, ge=1)
    page_size: WholeInt = Field(default=50, ge=1, le=200)

    @field_validator("page", "page_size", mode="before")
    @classmethod
    def _null_means_default(cls, v: Any, info) -> Any:
        if v is None:
            return cls.model_fields[info.field_name].default
        return v


class RentalsSearchRequest(PaginatedRequest):
    beds_min: Optional[WholeInt] = Field(default=None, ge=0)
    beds_max: Optional[WholeInt] = Field(default=None, ge=0)
    baths_min: Optional[WholeInt] = Field(default=None, ge=0)
    baths_max: Optional[WholeInt] = Field(default=None, ge=0)
    rent_min: Optional[WholeInt] = Field(default=None, ge=0)
    rent_max: Optional[WholeInt] = Field(default=None, ge=0)
    neighborhoods: Optional[List[StrictStr]] = None
    availability_start: Optional[StrictStr] = Field(default=None, pattern=DATE_PATTERN, description="YYYY-MM-DD")
    availability_end: Optional[StrictStr] = Field(default=None, pattern=DATE_PATTERN, description="YYYY-MM-DD")
    fee: Optional[FeeFilter] = None
    keyword: Optional[StrictStr] = None
    order_by: Optional[RentalOrder] = None
    include_photos: StrictBool = True

    @field_validator("availability_start", "availability_end")
    @classmethod
    def _calendar_date(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            try:
                date.fromisoformat(v)
            except ValueError:
                raise ValueError("must be a real calendar date (YYYY-MM-DD)")
        return v

    @field_validator("include_photos", mode="before")
    @classmethod
    def _photos_default(cls, v: Any) -> Any:
        return True if v is None else v


class AgentsSearchRequest(PaginatedRequest):
    id: Optional[WholeInt] = None
    name: Optional[StrictStr] = None
    email: Optional[StrictStr] = None
    active_only: StrictBool = True

    @field_validator("active_only", mode="before")
    @classmethod
    def _active_default(cls, v: Any) -> Any:
        return True if v is None else v


class LandlordsSearchRequest(PaginatedRequest):
    landlord_ids: Optional[List[WholeInt]] = None
    name: Optional[StrictStr] = None
    city: Optional[StrictStr] = None


class LeadCreateRequest(ProxyRequest):
    first_name: StrictStr
    last_name: StrictStr
    email: EmailStr
    phone: Optional[StrictStr] = None
    message: Optional[StrictStr] = None
    source: StrictStr = "Website"

    @field_validator("source", mode="before")
    @classmethod
    def _source_default(cls, v: Any) -> Any:
        return "Website" if v is None else v


RequestModel = TypeVar("RequestModel", bound=ProxyRequest)


def _field_errors(exc: PydanticValidationError) -> List[Dict[str, str]]:
    return [
        {
            "field": ".".join(str(part) for part in err["loc"]) or "body",
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]


def validate_request(model: Type[RequestModel], payload: Any) -> RequestModel:
    if not isinstance(payload, dict):
        raise ValidationError(
            "Request body must be a JSON object",
            details=[{"field": "body", "message": "Expected an object", "type": "dict_type"}],
        )
    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError("Invalid request body", details=_field_errors(exc)) from exc
