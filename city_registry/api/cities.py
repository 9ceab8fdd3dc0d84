from typing import Annotated, Any, Dict, List, Type

from fastapi import APIRouter, Body, Depends, Path, Request, Response, status
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

from city_registry.core.logging import get_logger
from city_registry.db.store import CityStore, get_store, parse_city_id
from city_registry.schemas.city import City, CityCreate, CityUpdate, Message

router = APIRouter(prefix="/cities", tags=["cities"])

logger = get_logger("city_registry.api.cities")

NOT_FOUND_RESPONSE = {"model": Message, "description": "City not found"}

# Taken as a string and parsed by parse_city_id so a non-numeric id is a 404
# rather than a 422. The schema type is overridden on purpose: clients see
# the integer id the route actually matches on.
CityId = Annotated[str, Path(description="City ID", json_schema_extra={"type": "integer"})]


def _request_body_doc(model: Type[BaseModel]) -> Dict[str, Any]:
    """Document a JSON request body with the given schema."""
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": model.model_json_schema()}},
        }
    }


def _json_object(payload: Any) -> Dict[str, Any]:
    """
    Normalise a parsed request body into the fields of a city.

    A missing body, or one sent with a non-JSON content type, counts as an
    empty object. Invalid JSON never gets here: FastAPI rejects it first.
    """
    if payload is None or isinstance(payload, bytes):
        return {}
    if isinstance(payload, dict):
        return payload
    raise RequestValidationError(
        [{
            "type": "dict_type",
            "loc": ("body",),
            "msg": "Input should be a valid dictionary",
            "input": payload,
        }],
        body=payload,
    )


def _check_payload(request: Request, model: Type[BaseModel], payload: Dict[str, Any]) -> None:
    """
    Validate a payload against the documented schema when the app enforces it.

    The payload itself is stored as sent; validation only gates the request.
    """
    if not request.app.state.settings.validate_payloads:
        return
    try:
        model.model_validate(payload)
    except ValidationError as e:
        errors = [
            {**error, "loc": ("body", *error["loc"])}
            for error in e.errors(include_url=False)
        ]
        logger.info("Rejected city payload", extra={"errors": len(errors)})
        raise RequestValidationError(errors, body=payload)


@router.get(
    "",
    response_model=None,
    summary="Returns all cities",
    responses={200: {"model": List[City], "description": "List of cities"}},
)
async def list_cities(store: CityStore = Depends(get_store)):
    """Return every city in insertion order."""
    return store.list()


@router.get(
    "/{city_id}",
    response_model=None,
    summary="Get a city by ID",
    responses={
        200: {"model": City, "description": "A single city"},
        404: NOT_FOUND_RESPONSE,
    },
)
async def get_city(city_id: CityId, store: CityStore = Depends(get_store)):
    return store.get(parse_city_id(city_id))


@router.post(
    "",
    response_model=None,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new city",
    responses={201: {"model": City, "description": "Created city"}},
    openapi_extra=_request_body_doc(CityCreate),
)
async def create_city(
    request: Request,
    body: Any = Body(None),
    store: CityStore = Depends(get_store),
):
    """
    Create a city from the request body.

    The server assigns the id; an `id` sent by the client is ignored.
    Any extra fields are stored as sent. A request without a body creates a
    city that only has an id.
    """
    payload = _json_object(body)
    _check_payload(request, CityCreate, payload)
    return store.create(payload)


@router.put(
    "/{city_id}",
    response_model=None,
    summary="Update a city by ID",
    responses={
        200: {"model": City, "description": "Updated city"},
        404: NOT_FOUND_RESPONSE,
    },
    openapi_extra=_request_body_doc(CityUpdate),
)
async def update_city(
    request: Request,
    city_id: CityId,
    body: Any = Body(None),
    store: CityStore = Depends(get_store),
):
    """
    Replace a city with the request body.

    **Full replace**: every field except `id` is taken from the body, so
    fields left out of the body are removed from the city. An unknown id is
    a 404 before the body is looked at.
    """
    city = store.get(parse_city_id(city_id))
    payload = _json_object(body)
    _check_payload(request, CityUpdate, payload)
    return store.update(city["id"], payload)


@router.delete(
    "/{city_id}",
    response_model=None,
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a city by ID",
    responses={
        204: {"description": "City deleted successfully"},
        404: NOT_FOUND_RESPONSE,
    },
)
async def delete_city(city_id: CityId, store: CityStore = Depends(get_store)):
    store.delete(parse_city_id(city_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
