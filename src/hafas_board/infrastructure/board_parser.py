"""Recovering parser for HAFAS station board responses.

The backend returns a sequence of ``<Journey>`` elements (or a single
``<Err>``) without a root element, in ISO-8859-15, often with an XML
declaration that does not match and with stray unescaped markup. Parsing is
split in two phases:

1. structural recovery (``parse_fragment`` / ``parse_html``): wrap the body
   in a synthetic root and let lxml's recovering parser build whatever tree
   it can;
2. strict extraction (``find_error`` / ``iter_journeys``): only read element
   names and attributes from that tree.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Iterator

from bs4 import BeautifulSoup, ParserRejectedMarkup, Tag

from hafas_board.domain.entities import RawJourney

logger = logging.getLogger(__name__)

LEGACY_ENCODING = "iso-8859-15"
WRAPPER = "wrap"
XML_DECLARATION = f'<?xml version="1.0" encoding="{LEGACY_ENCODING}"?>'.encode("ascii")

_LEADING_DECLARATION = re.compile(rb"^\s*<\?xml[^>]*\?>", re.IGNORECASE)

# HTML builders lower-case element and attribute names, so match loosely.
_ERR = re.compile(r"^err$", re.IGNORECASE)
_JOURNEY = re.compile(r"^journey$", re.IGNORECASE)
_HIM_MESSAGE = re.compile(r"^himmessage$", re.IGNORECASE)


def wrap_fragment(body: bytes | str) -> bytes:
    """Give the fragment an explicit encoding declaration and a single root."""
    if isinstance(body, str):
        body = body.encode(LEGACY_ENCODING, "xmlcharrefreplace")
    body = _LEADING_DECLARATION.sub(b"", body, count=1)
    root = WRAPPER.encode("ascii")
    return XML_DECLARATION + b"<%s>%s</%s>" % (root, body, root)


def parse_fragment(body: bytes | str) -> BeautifulSoup | None:
    """Parse a raw board body. Returns None when no usable tree can be recovered."""
    markup = wrap_fragment(body)
    logger.debug("Board XML: %s", markup.decode(LEGACY_ENCODING, "replace"))
    try:
        tree = BeautifulSoup(markup, "lxml-xml", from_encoding=LEGACY_ENCODING)
    except ParserRejectedMarkup as exc:
        logger.warning("Could not recover board XML: %s", exc)
        return None
    if tree.find(WRAPPER) is None:
        logger.warning("Recovered board XML has no %s root, treating it as empty", WRAPPER)
        return None
    logger.debug("Recovered tree: %s", tree)
    return tree


def parse_html(markup: bytes | str) -> BeautifulSoup | None:
    """Parse an HTML board page with the same tolerance as parse_fragment."""
    from_encoding = LEGACY_ENCODING if isinstance(markup, bytes) else None
    try:
        tree = BeautifulSoup(markup, "lxml", from_encoding=from_encoding)
    except ParserRejectedMarkup as exc:
        logger.warning("Could not recover board HTML: %s", exc)
        return None
    logger.debug("Recovered tree: %s", tree)
    return tree


def _attributes(node: Tag) -> dict[str, str]:
    attrs: dict[str, str] = {}
    for key, value in node.attrs.items():
        # HTML builders return multi-valued attributes (class, rel) as lists.
        attrs[key.lower()] = " ".join(value) if isinstance(value, list) else value
    return attrs


def find_error(tree: BeautifulSoup | None) -> tuple[str, str] | None:
    """Return (text, code) of the first Err element, or None."""
    if tree is None:
        return None
    node = tree.find(_ERR)
    if not isinstance(node, Tag):
        return None
    attrs = _attributes(node)
    return attrs.get("text", "").strip(), attrs.get("code", "").strip()


def iter_journeys(tree: BeautifulSoup | None) -> Iterator[RawJourney]:
    """Yield the raw attributes of every Journey element in document order."""
    if tree is None:
        return
    for node in tree.find_all(_JOURNEY):
        attrs = _attributes(node)
        messages = [
            _attributes(msg).get("header", "")
            for msg in node.find_all(_HIM_MESSAGE, recursive=False)
        ]
        yield RawJourney(
            train=attrs.get("prod"),
            time=attrs.get("fptime"),
            date=attrs.get("fpdate"),
            destination=attrs.get("targetloc"),
            platform=attrs.get("platform"),
            new_platform=attrs.get("newpl"),
            delay=attrs.get("delay"),
            e_delay=attrs.get("e_delay"),
            delay_reason=attrs.get("delayreason"),
            route_text=node.get_text(" "),
            messages=messages,
        )
