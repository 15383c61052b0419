"""Decoding of the JSON route-options payload sent by the host application."""

import orjson
from pydantic import TypeAdapter, ValidationError

LatLon = tuple[float, float]
Segment = list[LatLon]
RouteOption = list[Segment]

# Top-level null and null options are tolerated and read as empty
_OPTIONS_ADAPTER = TypeAdapter(list[list[list[LatLon]] | None] | None)


class PayloadError(ValueError):
    """Raised when the options payload is not valid JSON or has the wrong shape."""


def parse_route_options(raw: str | bytes) -> list[RouteOption]:
    """Parse '[[[[lat, lon], ...], ...], ...]' into a list of route options."""
    try:
        data = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        raise PayloadError(f"Malformed JSON payload: {e}") from e

    try:
        options = _OPTIONS_ADAPTER.validate_python(data)
    except ValidationError as e:
        raise PayloadError(f"Unexpected payload shape: {e.error_count()} validation error(s)") from e

    if options is None:
        return []
    return [option or [] for option in options]


def flatten_option(option: RouteOption) -> list[LatLon]:
    """Concatenate the segments of an option into its ordered stop list."""
    return [stop for segment in option for stop in segment]
