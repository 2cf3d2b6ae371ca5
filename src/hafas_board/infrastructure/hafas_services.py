from __future__ import annotations

from dataclasses import dataclass

DEFAULT_SERVICE = "DB"

_ALL_MODES = ("ice", "ic_ec", "d", "nv", "s", "bus", "ferry", "u", "tram")


@dataclass(frozen=True)
class HafasService:
    """A known HAFAS installation."""

    code: str
    name: str
    url: str  # station board endpoint, without the /<lang>n suffix
    stopfinder: str | None  # ajax-getstop endpoint for station suggestions
    productbits: tuple[str, ...]  # mode-of-transport categories the service knows


_SERVICES: tuple[HafasService, ...] = (
    HafasService(
        code="BVG",
        name="Berliner Verkehrsgesellschaft",
        url="https://bvg.hafas.de/bin/stboard.exe",
        stopfinder="https://bvg.hafas.de/bin/ajax-getstop.exe",
        productbits=("s", "u", "tram", "bus", "ferry", "ice", "nv"),
    ),
    HafasService(
        code="DB",
        name="Deutsche Bahn",
        url="https://reiseauskunft.bahn.de/bin/bhftafel.exe",
        stopfinder="https://reiseauskunft.bahn.de/bin/ajax-getstop.exe",
        productbits=_ALL_MODES,
    ),
    HafasService(
        code="NAHSH",
        name="Nahverkehrsverbund Schleswig-Holstein",
        url="https://nah.sh.hafas.de/bin/stboard.exe",
        stopfinder="https://nah.sh.hafas.de/bin/ajax-getstop.exe",
        productbits=_ALL_MODES,
    ),
    HafasService(
        code="NASA",
        name="Nahverkehrsservice Sachsen-Anhalt",
        url="https://reiseauskunft.insa.de/bin/stboard.exe",
        stopfinder="https://reiseauskunft.insa.de/bin/ajax-getstop.exe",
        productbits=("ice", "ic_ec", "nv", "s", "tram", "bus"),
    ),
    HafasService(
        code="NVV",
        name="Nordhessischer VerkehrsVerbund",
        url="https://auskunft.nvv.de/auskunft/bin/jp/stboard.exe",
        stopfinder="https://auskunft.nvv.de/auskunft/bin/jp/ajax-getstop.exe",
        productbits=("ice", "ic_ec", "d", "nv", "s", "u", "tram", "bus"),
    ),
    HafasService(
        code="OEBB",
        name="Österreichische Bundesbahnen",
        url="https://fahrplan.oebb.at/bin/stboard.exe",
        stopfinder="https://fahrplan.oebb.at/bin/ajax-getstop.exe",
        productbits=_ALL_MODES,
    ),
    HafasService(
        code="RSAG",
        name="Rostocker Straßenbahn AG",
        url="https://fahrplan.rsag-online.de/hafas/stboard.exe",
        stopfinder="https://fahrplan.rsag-online.de/hafas/ajax-getstop.exe",
        productbits=("ice", "ic_ec", "d", "nv", "s", "bus", "ferry", "tram"),
    ),
    HafasService(
        code="VBB",
        name="Verkehrsverbund Berlin-Brandenburg",
        url="https://fahrinfo.vbb.de/bin/stboard.exe",
        stopfinder="https://fahrinfo.vbb.de/bin/ajax-getstop.exe",
        productbits=("s", "u", "tram", "bus", "ferry", "ice", "nv"),
    ),
    HafasService(
        code="VRN",
        name="Verkehrsverbund Rhein-Neckar",
        url="https://fahrplanauskunft.vrn.de/hafas/stboard.exe",
        stopfinder=None,
        productbits=("ice", "ic_ec", "nv", "s", "u", "tram", "bus"),
    ),
)

_BY_CODE = {service.code: service for service in _SERVICES}


def get_service(code: str) -> HafasService | None:
    """Look up a service by its short code (case-insensitive)."""
    return _BY_CODE.get(code.strip().upper())


def get_services() -> list[HafasService]:
    """Return the whole catalog, ordered by code."""
    return list(_SERVICES)
