"""Leaflet map surface backed by NiceGUI."""

from __future__ import annotations

import asyncio
import logging
import math
from typing import Any

from nicegui import events, ui

from mapty.map.surface import (
    ClickHandler,
    LocationUnavailable,
    MarkerHandle,
    PopupStyle,
)
from mapty.workout.model import Coordinates

logger = logging.getLogger(__name__)

DEFAULT_CENTER: Coordinates = (51.505, -0.09)

_GEOLOCATION_JS = """
new Promise((resolve) => {
  if (!navigator.geolocation) {
    resolve({error: "Geolocation is not supported by this browser"});
    return;
  }
  navigator.geolocation.getCurrentPosition(
    (position) => resolve({lat: position.coords.latitude, lng: position.coords.longitude}),
    (error) => resolve({error: error.message || "Could not access your location"}),
    {timeout: %d},
  );
})
"""


def latlng_from_event_args(args: Any) -> Coordinates:
    """Extract ``(lat, lng)`` from a Leaflet event or geolocation payload."""
    if not isinstance(args, dict):
        raise ValueError(f"Unexpected map payload: {args!r}")
    point = args.get("latlng", args)
    if not isinstance(point, dict):
        raise ValueError(f"Unexpected map payload: {args!r}")
    try:
        lat = float(point["lat"])
        lng = float(point["lng"])
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Unexpected map payload: {args!r}") from exc
    if not (math.isfinite(lat) and math.isfinite(lng)):
        raise ValueError(f"Non-finite coordinates in payload: {args!r}")
    return (lat, lng)


class LeafletSurface:
    def __init__(
        self,
        leaflet: ui.leaflet,
        location_timeout_sec: float = 10.0,
        simulated_location: Coordinates | None = None,
    ) -> None:
        self._map = leaflet
        self._location_timeout_sec = location_timeout_sec
        self._simulated_location = simulated_location

    def center_on(self, coordinates: Coordinates | None, zoom: int) -> None:
        if coordinates is None:
            return
        self._map.set_center(coordinates)
        self._map.set_zoom(zoom)

    def subscribe_to_click(self, handler: ClickHandler) -> None:
        def _on_click(event: events.GenericEventArguments) -> None:
            try:
                coordinates = latlng_from_event_args(event.args)
            except ValueError as exc:
                logger.warning("Ignoring map click: %s", exc)
                return
            handler(coordinates)

        self._map.on("map-click", _on_click)

    def place_marker(
        self,
        coordinates: Coordinates,
        label: str,
        style: PopupStyle | None = None,
    ) -> MarkerHandle:
        marker = self._map.marker(latlng=coordinates)
        options = style.to_leaflet_options() if style is not None else {}
        marker.run_method("bindPopup", label, options)
        marker.run_method("openPopup")
        return marker

    async def request_current_location(self) -> Coordinates:
        # Layer methods sent before the map exists in the browser are dropped.
        await self._map.initialized()
        if self._simulated_location is not None:
            return self._simulated_location

        timeout_ms = int(self._location_timeout_sec * 1000)
        try:
            result = await self._map.client.run_javascript(
                _GEOLOCATION_JS % timeout_ms,
                timeout=self._location_timeout_sec + 1.0,
            )
        except (asyncio.TimeoutError, TimeoutError) as exc:
            raise LocationUnavailable("Timed out waiting for your location") from exc

        if isinstance(result, dict) and "error" in result:
            raise LocationUnavailable(str(result["error"]))
        try:
            return latlng_from_event_args(result)
        except ValueError as exc:
            raise LocationUnavailable(str(exc)) from exc
