from __future__ import annotations

from hafas_board.domain.value_objects import Language

USER_AGENT = "hafas-board/0.1 (+https://pypi.org/project/hafas-board/)"

_ACCEPT_LANGUAGE = {
    Language.GERMAN: "de-DE,de;q=0.9,en;q=0.5",
    Language.ENGLISH: "en-GB,en;q=0.9,de;q=0.5",
    Language.ITALIAN: "it-IT,it;q=0.9,en;q=0.5",
    Language.DUTCH: "nl-NL,nl;q=0.9,en;q=0.5",
}


def make_headers(language: Language = Language.GERMAN) -> dict[str, str]:
    """Return the request headers for a HAFAS form POST.

    The backend answers in ISO-8859-15 regardless of what we ask for, so
    Accept-Charset only documents what the parser expects.
    """
    return {
        "Accept": "text/xml, text/html;q=0.9, */*;q=0.1",
        "Accept-Charset": "iso-8859-15, iso-8859-1;q=0.9, utf-8;q=0.5",
        "Accept-Language": _ACCEPT_LANGUAGE[language],
        "Cache-Control": "no-cache",
        "Pragma": "no-cache",
        "User-Agent": USER_AGENT,
    }
