# io/locations.py
import re
from collections.abc import Iterable
from enum import Enum

from tsp_route.domain.entities.geography import Node


class LocationFormat(Enum):
    COORDINATE = "coordinate"  # "12,30"
    ALPHABETICAL_X = "alphabetical_x"  # "...M25": letter -> x, number -> y
    ALPHABETICAL_Y = "alphabetical_y"  # "...M25": letter -> y, number -> x


_COORD = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*,\s*(-?\d+(?:\.\d+)?)\s*$")
_GRID_CODE = re.compile(r"([A-Za-z])(\d{2})\s*$")


def parse_location(text: str, fmt: LocationFormat | str = LocationFormat.COORDINATE) -> Node:
    """
    Turn a location label into a Node. Grid codes are 1-based ("A01" is the
    first cell) and keep the label as id; coordinates get the canonical "x,y"
    id, so "1.0, 2" and Node(1, 2) name the same location.
    """
    fmt = LocationFormat(fmt)
    if fmt is LocationFormat.COORDINATE:
        m = _COORD.match(text)
        if not m:
            raise ValueError(f"not an 'x,y' coordinate: {text!r}")
        x, y = (float(g) for g in m.groups())
        return Node(x, y)

    m = _GRID_CODE.search(text)
    if not m:
        raise ValueError(f"no trailing <letter><2 digits> grid code in {text!r}")
    letter = ord(m.group(1).upper()) - ord("A")
    number = int(m.group(2)) - 1
    if number < 0:
        raise ValueError(f"grid code number must start at 01: {text!r}")
    if fmt is LocationFormat.ALPHABETICAL_X:
        return Node(letter, number, text.strip())
    return Node(number, letter, text.strip())


def parse_locations(
    labels: Iterable[str], fmt: LocationFormat | str = LocationFormat.COORDINATE
) -> list[Node]:
    return [parse_location(label, fmt) for label in labels]
