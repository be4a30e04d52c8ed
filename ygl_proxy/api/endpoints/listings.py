import json
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Type

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ygl_proxy.api.dependencies import get_cache, get_error_handler, get_settings, get_ygl_client
from ygl_proxy.database.memory_cache import ResponseCache, cache_key
from ygl_proxy.error_handler import ErrorHandler, PayloadTooLargeError, ValidationError
from ygl_proxy.integrations.clients.real_http.ygl import (
    AGENTS_SEARCH_PATH,
    LANDLORDS_SEARCH_PATH,
    LEADS_CREATE_PATH,
    RENTALS_SEARCH_PATH,
    YGLClient,
)
from ygl_proxy.integrations.policy.response_wrappers import normalize_upstream_body
from ygl_proxy.integrations.ygl.field_mapper import UpstreamForm, map_agents, map_landlords, map_lead, map_rentals
from ygl_proxy.schemas.requests import (
    AgentsSearchRequest,
    LandlordsSearchRequest,
    LeadCreateRequest,
    ProxyRequest,
    RentalsSearchRequest,
    validate_request,
)
from ygl_proxy.utils.config_loader import Settings

listings_api = APIRouter()


@dataclass(frozen=True)
class ProxyEndpoint:
    path: str
    model: Type[ProxyRequest]
    mapper: Callable[[Any, str], UpstreamForm]
    upstream_path: str
    cacheable: bool = True


RENTALS_SEARCH = ProxyEndpoint("/api/rentals/search", RentalsSearchRequest, map_rentals, RENTALS_SEARCH_PATH)
AGENTS_SEARCH = ProxyEndpoint("/api/agents/search", AgentsSearchRequest, map_agents, AGENTS_SEARCH_PATH)
LANDLORDS_SEARCH = ProxyEndpoint("/api/landlords/search", LandlordsSearchRequest, map_landlords, LANDLORDS_SEARCH_PATH)
# Leads are writes, so they always reach YGL.
CREATE_LEAD = ProxyEndpoint("/api/leads", LeadCreateRequest, map_lead, LEADS_CREATE_PATH, cacheable=False)


async def _read_limited_body(request: Request, max_bytes: int) -> bytes:
    too_large = PayloadTooLargeError(f"Request body exceeds {max_bytes} bytes")
    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > max_bytes:
        raise too_large

    # Chunked bodies carry no length; stop reading as soon as the limit is passed.
    chunks = []
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > max_bytes:
            raise too_large
        chunks.append(chunk)
    return b"".join(chunks)


async def _read_json_body(request: Request, max_bytes: int) -> Any:
    raw = await _read_limited_body(request, max_bytes)
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise ValidationError(
            "Malformed JSON body",
            details=[{"field": "body", "message": str(exc), "type": "json_invalid"}],
        ) from exc


async def _proxy(
    endpoint: ProxyEndpoint,
    request: Request,
    settings: Settings,
    cache: ResponseCache,
    client: YGLClient,
    errors: ErrorHandler,
):
    """validate -> cache lookup -> map -> YGL -> normalize -> cache store"""
    try:
        payload = await _read_json_body(request, settings.max_body_bytes)
        body = validate_request(endpoint.model, payload)

        key: Optional[str] = None
        if endpoint.cacheable:
            key = cache_key(endpoint.path, body.compact())
            cached = cache.lookup(key)
            if cached is not None:
                return JSONResponse(content={"cached": True, **cached})

        form = endpoint.mapper(body, settings.ygl_api_key)
        upstream = await client.post_form(endpoint.upstream_path, form)
        data = normalize_upstream_body(upstream.content_type, upstream.text)

        result: Dict[str, Any] = {"success": True, "data": data}
        # Render before storing so only payloads that serialize end up cached.
        response = JSONResponse(content=result)
        if key is not None:
            cache.store(key, result)
        return response
    except Exception as exc:
        envelope = errors.handle_exception(exc, context={"path": endpoint.path})
        return JSONResponse(status_code=envelope["error"]["status"], content=envelope)


@listings_api.post("/rentals/search", tags=["Rentals"])
async def rentals_search(
    request: Request,
    settings: Settings = Depends(get_settings),
    cache: ResponseCache = Depends(get_cache),
    client: YGLClient = Depends(get_ygl_client),
    errors: ErrorHandler = Depends(get_error_handler),
):
    """Search rental listings. Cached per body for the configured TTL."""
    return await _proxy(RENTALS_SEARCH, request, settings, cache, client, errors)


@listings_api.post("/agents/search", tags=["Agents"])
async def agents_search(
    request: Request,
    settings: Settings = Depends(get_settings),
    cache: ResponseCache = Depends(get_cache),
    client: YGLClient = Depends(get_ygl_client),
    errors: ErrorHandler = Depends(get_error_handler),
):
    return await _proxy(AGENTS_SEARCH, request, settings, cache, client, errors)


@listings_api.post("/landlords/search", tags=["Landlords"])
async def landlords_search(
    request: Request,
    settings: Settings = Depends(get_settings),
    cache: ResponseCache = Depends(get_cache),
    client: YGLClient = Depends(get_ygl_client),
    errors: ErrorHandler = Depends(get_error_handler),
):
    """Search landlords (needs advanced API access on the YGL account)."""
    return await _proxy(LANDLORDS_SEARCH, request, settings, cache, client, errors)


@listings_api.post("/leads", tags=["Leads"])
async def create_lead(
    request: Request,
    settings: Settings = Depends(get_settings),
    cache: ResponseCache = Depends(get_cache),
    client: YGLClient = Depends(get_ygl_client),
    errors: ErrorHandler = Depends(get_error_handler),
):
    """Create a lead in YGL. Never cached."""
    return await _proxy(CREATE_LEAD, request, settings, cache, client, errors)
