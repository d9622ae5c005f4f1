"""Shared schema types used across both requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Coordinates(BaseModel):
    """A bare latitude/longitude pair in degrees."""

    lat: float = Field(ge=-90, le=90, description='Latitude in degrees.')
    lng: float = Field(ge=-180, le=180, description='Longitude in degrees.')
