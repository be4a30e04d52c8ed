"""
Translate validated proxy requests into YGL form fields.

YGL expects flat, form-encoded fields: lists are comma joined, booleans are
1/0, and the page size is called ``page_count``. Fields the client left out
are omitted rather than sent empty.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional, Union

from ygl_proxy.schemas.requests import (
    AgentsSearchRequest,
    LandlordsSearchRequest,
    LeadCreateRequest,
    RentalsSearchRequest,
)

FormValue = Union[str, int]
UpstreamForm = Dict[str, FormValue]


def _flag(value: bool) -> int:
    return 1 if value else 0


def _joined(values: Optional[Iterable[Any]]) -> Optional[str]:
    if not values:
        return None
    return ",".join(str(v) for v in values)


def _form(api_key: str, **fields: Optional[FormValue]) -> UpstreamForm:
    form: UpstreamForm = {"api_key": api_key}
    form.update({k: v for k, v in fields.items() if v is not None})
    return form


def map_rentals(body: RentalsSearchRequest, api_key: str) -> UpstreamForm:
    return _form(
        api_key,
        beds_min=body.beds_min,
        beds_max=body.beds_max,
        baths_min=body.baths_min,
        baths_max=body.baths_max,
        rent_min=body.rent_min,
        rent_max=body.rent_max,
        keyword=body.keyword,
        order_by=body.order_by,
        include_photos=_flag(body.include_photos),
        page=body.page,
        page_count=body.page_size,
        # "any" is YGL's default, so it is never sent
        fee=body.fee if body.fee != "any" else None,
        availability_start=body.availability_start,
        availability_end=body.availability_end,
        neighborhoods=_joined(body.neighborhoods),
    )


def map_agents(body: AgentsSearchRequest, api_key: str) -> UpstreamForm:
    return _form(
        api_key,
        id=body.id,
        name=body.name,
        email=body.email,
        active_only=_flag(body.active_only),
        page=body.page,
        page_count=body.page_size,
    )


def map_landlords(body: LandlordsSearchRequest, api_key: str) -> UpstreamForm:
    return _form(
        api_key,
        landlord_ids=_joined(body.landlord_ids),
        name=body.name,
        city=body.city,
        page=body.page,
        page_count=body.page_size,
    )


def map_lead(body: LeadCreateRequest, api_key: str) -> UpstreamForm:
    return _form(
        api_key,
        first_name=body.first_name,
        last_name=body.last_name,
        email=body.email,
        phone=body.phone,
        message=body.message,
        source=body.source or "Website",
    )
