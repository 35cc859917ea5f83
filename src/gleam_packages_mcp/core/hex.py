"""Decoding of hex.pm package metadata (package info, search results, releases)."""

from __future__ import annotations

import json
from typing import Any

from gleam_packages_mcp.core.errors import PackageDecodeError
from gleam_packages_mcp.core.fields import optional_bool, optional_dict, optional_int, optional_list, optional_str
from gleam_packages_mcp.models import PackageInfo, PackageReleases, PackageSummary, Release, Retirement

_REPOSITORY_LINK_KEYS = ("repository", "github", "source", "gitlab", "sourcehut")


def _load(text: str | bytes, what: str) -> Any:
    try:
        return json.loads(text)
    except (ValueError, RecursionError) as exc:
        raise PackageDecodeError(f"{what} is not valid JSON: {exc}") from exc


def _load_package(text: str | bytes) -> dict[str, Any]:
    document = _load(text, "package metadata")
    if not isinstance(document, dict) or not isinstance(document.get("name"), str):
        raise PackageDecodeError("package metadata is missing required field 'name'")
    return document


def _repository_url(links: dict[str, Any]) -> str:
    lowered = {str(k).lower(): v for k, v in links.items() if isinstance(v, str)}
    for key in _REPOSITORY_LINK_KEYS:
        if key in lowered:
            return lowered[key]
    return ""


def _package_info(document: dict[str, Any]) -> PackageInfo:
    meta = optional_dict(document, "meta")
    downloads = optional_dict(document, "downloads")
    return PackageInfo(
        name=document["name"],
        description=optional_str(meta, "description"),
        licenses=tuple(item for item in optional_list(meta, "licenses") if isinstance(item, str)),
        repository_url=_repository_url(optional_dict(meta, "links")),
        hex_url=optional_str(document, "html_url"),
        docs_url=optional_str(document, "docs_html_url"),
        latest_version=optional_str(document, "latest_version"),
        latest_stable_version=optional_str(document, "latest_stable_version"),
        downloads_all=optional_int(downloads, "all"),
        downloads_recent=optional_int(downloads, "recent"),
        inserted_at=optional_str(document, "inserted_at"),
        updated_at=optional_str(document, "updated_at"),
    )


def decode_package_info(text: str | bytes) -> PackageInfo:
    return _package_info(_load_package(text))


def decode_package_search(text: str | bytes) -> list[PackageSummary]:
    """Decode the hex.pm search listing. Entries without a name are skipped."""
    document = _load(text, "package search results")
    if not isinstance(document, list):
        raise PackageDecodeError("package search results must be a JSON array")
    summaries: list[PackageSummary] = []
    for entry in document:
        if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
            continue
        summaries.append(
            PackageSummary(
                name=entry["name"],
                description=optional_str(optional_dict(entry, "meta"), "description"),
                latest_version=optional_str(entry, "latest_version"),
                downloads_all=optional_int(optional_dict(entry, "downloads"), "all"),
                hex_url=optional_str(entry, "html_url"),
            )
        )
    return summaries


def decode_retirement(data: Any) -> Retirement:
    return Retirement(reason=optional_str(data, "reason", "other"), message=optional_str(data, "message"))


def merge_releases(name: str, releases: list[Any], retirements: dict[str, Any]) -> PackageReleases:
    """Attach each entry of the sparse ``retirements`` map to the release with the same version."""
    merged: list[Release] = []
    for data in releases:
        version = optional_str(data, "version")
        if not version:
            continue
        retired = retirements.get(version)
        merged.append(
            Release(
                version=version,
                inserted_at=optional_str(data, "inserted_at"),
                has_docs=optional_bool(data, "has_docs", False),
                retirement=decode_retirement(retired) if isinstance(retired, dict) else None,
            )
        )
    return PackageReleases(name=name, releases=tuple(merged))


def decode_package_releases(text: str | bytes) -> PackageReleases:
    document = _load_package(text)
    return merge_releases(
        document["name"],
        optional_list(document, "releases"),
        optional_dict(document, "retirements"),
    )
