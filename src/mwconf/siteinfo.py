"""Typed view of the ``action=query&meta=siteinfo`` response.

Only the properties requested by the fetcher are modelled; unknown keys are
ignored. ``parse_siteinfo`` raises ``pydantic.ValidationError`` when the
decoded JSON does not have the expected shape.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt


class _SiteInfoModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


class General(_SiteInfoModel):
    link_trail: str = Field(alias="linktrail")


class MagicWord(_SiteInfoModel):
    name: str
    aliases: tuple[str, ...]


class Namespace(_SiteInfoModel):
    alias: str = Field(alias="*")
    canonical: str | None = None
    id: StrictInt


class NamespaceAlias(_SiteInfoModel):
    id: StrictInt
    alias: str = Field(alias="*")


class SiteMetadata(_SiteInfoModel):
    extension_tags: tuple[str, ...] = Field(alias="extensiontags")
    general: General
    magic_words: tuple[MagicWord, ...] = Field(alias="magicwords")
    namespace_aliases: tuple[NamespaceAlias, ...] = Field(alias="namespacealiases")
    namespaces: dict[str, Namespace]
    protocols: tuple[str, ...]


class SiteInfoResponse(_SiteInfoModel):
    query: SiteMetadata


def parse_siteinfo(data: Any) -> SiteMetadata:
    return SiteInfoResponse.model_validate(data).query
