from pydantic import BaseModel, ConfigDict, Field
from pydantic.json_schema import SkipJsonSchema
from typing import Union

# Optional fields are rendered as plain types so the document stays OpenAPI 3.0
OptionalInt = Union[int, SkipJsonSchema[None]]
OptionalStr = Union[str, SkipJsonSchema[None]]


class CityBase(BaseModel):
    """Base schema for City"""
    model_config = ConfigDict(extra="allow")

    name: str = Field(..., description="City name")
    population: OptionalInt = Field(None, description="City population")
    country: OptionalStr = Field(None, description="Country name")


class CityCreate(CityBase):
    """Payload for creating a city"""
    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "example": {"name": "Addis Ababa", "population": 5000000, "country": "Ethiopia"},
        },
    )


class CityUpdate(BaseModel):
    """Payload for updating a city (replaces every field except id)"""
    model_config = ConfigDict(extra="allow")

    name: OptionalStr = Field(None, description="City name")
    population: OptionalInt = Field(None, description="City population")
    country: OptionalStr = Field(None, description="Country name")


class City(CityBase):
    """Stored city"""
    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "example": {"id": 1, "name": "Addis Ababa", "population": 5000000, "country": "Ethiopia"},
        },
    )

    id: int = Field(..., description="Auto-generated ID")


class Message(BaseModel):
    """Error body"""
    message: str = Field(..., json_schema_extra={"example": "City not found"})
