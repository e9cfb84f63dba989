"""Map surface boundary consumed by the session controller."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Protocol

from mapty.workout.model import Coordinates

ClickHandler = Callable[[Coordinates], None]
MarkerHandle = Any


class LocationUnavailable(RuntimeError):
    """Raised when the user's position cannot be obtained."""


@dataclass(frozen=True)
class PopupStyle:
    class_name: str
    max_width: int = 250
    max_height: int = 120
    auto_close: bool = False
    close_on_click: bool = False

    def to_leaflet_options(self) -> dict[str, Any]:
        return {
            "maxWidth": self.max_width,
            "maxHeight": self.max_height,
            "autoClose": self.auto_close,
            "closeOnClick": self.close_on_click,
            "className": self.class_name,
        }


LOCATION_POPUP = PopupStyle(class_name="location-popup")


def popup_style_for(kind: str) -> PopupStyle:
    return PopupStyle(class_name=f"{kind}-popup")


class MapSurface(Protocol):
    def center_on(self, coordinates: Coordinates | None, zoom: int) -> None:
        ...

    def subscribe_to_click(self, handler: ClickHandler) -> None:
        ...

    def place_marker(
        self,
        coordinates: Coordinates,
        label: str,
        style: PopupStyle | None = None,
    ) -> MarkerHandle:
        ...

    async def request_current_location(self) -> Coordinates:
        ...
