# peoplenrich/services/lookup/http_lookup_client.py
from __future__ import annotations

from typing import Any, Callable, Dict, Optional

import httpx

from peoplenrich.common.logging import get_logger
from peoplenrich.common.settings import get_settings
from peoplenrich.domain.enums.attribute_kind import AttributeKind
from peoplenrich.domain.errors import LookupFailed, UpstreamError
from peoplenrich.domain.ports.lookup import AttributeLookupPort, LookupValue

logger = get_logger(__name__)


class HttpAttributeLookup(AttributeLookupPort):
    """
    Infrastructure adapter implementing AttributeLookupPort against the
    agify / genderize / nationalize style inference services.

    One GET per call, `?name=<name>` appended to the base URL of the attribute kind.
    No retries; the client timeout is the only deadline.
    """

    def __init__(
        self,
        *,
        age_url: Optional[str] = None,
        gender_url: Optional[str] = None,
        nationality_url: Optional[str] = None,
        timeout_sec: Optional[float] = None,
        client: Optional[httpx.Client] = None,
    ):
        cfg = get_settings().enrichment
        self.base_urls: Dict[AttributeKind, str] = {
            AttributeKind.age: age_url or cfg.age_url,
            AttributeKind.gender: gender_url or cfg.gender_url,
            AttributeKind.nationality: nationality_url or cfg.nationality_url,
        }
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout_sec or cfg.timeout_sec)

    # ---- Port API -------------------------------------------------------------
    def fetch(self, kind: AttributeKind, name: str) -> LookupValue:
        kind = AttributeKind(kind)
        url = self.base_urls[kind]
        logger.debug("%s lookup: GET %s name=%s", kind, url, name)

        try:
            resp = self._client.get(url, params={"name": name})
        except httpx.HTTPError as e:
            raise LookupFailed(kind, e) from e

        if not resp.is_success:
            raise UpstreamError(kind, resp.status_code)

        try:
            body = resp.json()
            return _PARSERS[kind](body)
        except (KeyError, TypeError, ValueError) as e:
            raise LookupFailed(kind, e) from e

    # ---- lifecycle ------------------------------------------------------------
    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "HttpAttributeLookup":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


# ---- body parsers -------------------------------------------------------------
def _parse_age(body: dict) -> Optional[int]:
    age = body["age"]
    if age is None:
        return None
    if isinstance(age, bool) or not isinstance(age, int):
        raise TypeError(f"age must be an integer, got {age!r}")
    if age < 0:
        raise ValueError(f"age must be >= 0, got {age}")
    return age


def _parse_gender(body: dict) -> Optional[str]:
    gender = body["gender"]
    if gender is not None and not isinstance(gender, str):
        raise TypeError(f"gender must be a string, got {gender!r}")
    return gender


def _parse_nationality(body: dict) -> str:
    countries = body["country"]
    if not isinstance(countries, list):
        raise TypeError(f"country must be a list, got {countries!r}")
    if not countries:
        return ""
    # upstream orders by probability; the first entry is the answer
    country_id = countries[0]["country_id"]
    if not isinstance(country_id, str):
        raise TypeError(f"country_id must be a string, got {country_id!r}")
    return country_id


_PARSERS: Dict[AttributeKind, Callable[[Any], LookupValue]] = {
    AttributeKind.age: _parse_age,
    AttributeKind.gender: _parse_gender,
    AttributeKind.nationality: _parse_nationality,
}
