from __future__ import annotations

import logging
from dataclasses import dataclass
from urllib.parse import urlencode, urlsplit

import requests
from pydantic import ValidationError

from .config import DEFAULT_API_PATH
from .siteinfo import SiteMetadata, parse_siteinfo


log = logging.getLogger("mwconf.mediawiki")

SITEINFO_PROPERTIES = (
    "extensiontags",
    "general",
    "magicwords",
    "namespaces",
    "namespacealiases",
    "protocols",
)
EXPECTED_CONTENT_TYPE = "application/json; charset=utf-8"


class MediaWikiError(RuntimeError):
    pass


class InvalidUrlError(MediaWikiError):
    pass


class RequestFailedError(MediaWikiError):
    pass


class UnexpectedStatusError(MediaWikiError):
    pass


class UnexpectedContentTypeError(MediaWikiError):
    pass


class ResponseParseError(MediaWikiError):
    pass


def build_siteinfo_url(host_name: str, api_path: str = DEFAULT_API_PATH) -> str:
    query = urlencode(
        {
            "action": "query",
            "format": "json",
            "meta": "siteinfo",
            "siprop": "|".join(SITEINFO_PROPERTIES),
        }
    )
    if not host_name or any(ch.isspace() for ch in host_name):
        raise InvalidUrlError(f"Invalid URL: invalid host name {host_name!r}")
    url = f"https://{host_name}{api_path}?{query}"
    try:
        parts = urlsplit(url)
        # raises ValueError on a malformed port
        parts.port
    except ValueError as exc:
        raise InvalidUrlError(f"Invalid URL: {exc}") from exc
    if parts.netloc != host_name or not parts.hostname or "@" in parts.netloc:
        raise InvalidUrlError(f"Invalid URL: invalid host name {host_name!r}")
    return url


def describe_response(resp: requests.Response) -> str:
    headers = ", ".join(f"{name}: {value}" for name, value in resp.headers.items())
    return f"<{resp.status_code} {resp.reason}> url={resp.url} headers={{{headers}}}"


@dataclass
class MediaWikiClient:
    host_name: str
    user_agent: str
    session: requests.Session
    api_path: str = DEFAULT_API_PATH

    def fetch_siteinfo(self) -> SiteMetadata:
        url = build_siteinfo_url(self.host_name, self.api_path)
        headers = {"User-Agent": self.user_agent}
        log.info("fetching %s", url)
        try:
            resp = self.session.get(url, headers=headers)
        except requests.RequestException as exc:
            raise RequestFailedError(f"Request failed: {exc}") from exc

        if resp.status_code != 200:
            raise UnexpectedStatusError(
                "The status of the response is not as expected. "
                f"Response: {describe_response(resp)}"
            )
        content_type = resp.headers.get("Content-Type")
        if content_type != EXPECTED_CONTENT_TYPE:
            raise UnexpectedContentTypeError(
                "The value of the 'Content-Type' header of the response is not as expected. "
                f"Response: {describe_response(resp)}"
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise ResponseParseError(f"Failed to parse response: {exc}") from exc
        try:
            metadata = parse_siteinfo(data)
        except ValidationError as exc:
            raise ResponseParseError(f"Failed to parse response: {exc}") from exc
        log.info(
            "siteinfo: %s extension tags, %s magic words, %s namespaces, %s protocols",
            len(metadata.extension_tags),
            len(metadata.magic_words),
            len(metadata.namespaces),
            len(metadata.protocols),
        )
        return metadata
