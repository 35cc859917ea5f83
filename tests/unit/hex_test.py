"""Unit tests for hex.pm metadata decoding."""

from __future__ import annotations

import json

import pytest

from gleam_packages_mcp.core.errors import PackageDecodeError
from gleam_packages_mcp.core.hex import (
    decode_package_info,
    decode_package_releases,
    decode_package_search,
    merge_releases,
)
from tests.conftest import SAMPLE_PACKAGE, SAMPLE_SEARCH


class TestPackageInfo:
    def test_decodes_metadata(self) -> None:
        info = decode_package_info(json.dumps(SAMPLE_PACKAGE))
        assert info.name == "sample"
        assert info.description == "Sample utilities for Gleam."
        assert info.licenses == ("Apache-2.0",)
        assert info.repository_url == "https://github.com/example/sample"
        assert info.hex_url == "https://hex.pm/packages/sample"
        assert info.docs_url == "https://hexdocs.pm/sample/"
        assert info.downloads_all == 1500
        assert info.downloads_recent == 120

    def test_optional_fields_default(self) -> None:
        info = decode_package_info(json.dumps({"name": "bare"}))
        assert info.description == ""
        assert info.licenses == ()
        assert info.repository_url == ""
        assert info.downloads_all == 0

    def test_missing_name_fails(self) -> None:
        with pytest.raises(PackageDecodeError, match="name"):
            decode_package_info(json.dumps({"meta": {}}))

    def test_invalid_json_fails(self) -> None:
        with pytest.raises(PackageDecodeError, match="not valid JSON"):
            decode_package_info("<html>")

    @pytest.mark.parametrize(
        "text",
        ["[" * 100_000 + "]" * 100_000, '{"name": "x", "downloads": {"all": ' + "1" * 5000 + "}}"],
        ids=["deep-nesting", "huge-integer"],
    )
    def test_json_beyond_parser_limits_fails(self, text: str) -> None:
        with pytest.raises(PackageDecodeError, match="not valid JSON"):
            decode_package_info(text)


class TestPackageSearch:
    def test_decodes_summaries(self) -> None:
        packages = decode_package_search(json.dumps(SAMPLE_SEARCH))
        assert [p.name for p in packages] == ["sample", "sample_extra"]
        assert packages[0].downloads_all == 1500
        assert packages[1].description == ""

    def test_skips_entries_without_name(self) -> None:
        packages = decode_package_search(json.dumps([{"meta": {}}, {"name": "ok"}, "junk"]))
        assert [p.name for p in packages] == ["ok"]

    def test_non_array_fails(self) -> None:
        with pytest.raises(PackageDecodeError):
            decode_package_search(json.dumps({"name": "x"}))


class TestReleases:
    def test_retirements_merge_by_version(self) -> None:
        releases = decode_package_releases(json.dumps(SAMPLE_PACKAGE))
        assert releases.name == "sample"
        assert [r.version for r in releases.releases] == ["1.2.0", "1.1.0", "1.0.0"]
        retired = {r.version: r.retirement for r in releases.releases}
        assert retired["1.2.0"] is None
        assert retired["1.1.0"] is not None
        assert retired["1.1.0"].reason == "security"
        assert retired["1.1.0"].message == "CVE fix in 1.2.0"
        assert releases.releases[2].has_docs is False

    def test_retirement_for_unknown_version_is_ignored(self) -> None:
        releases = merge_releases("p", [{"version": "1.0.0"}], {"9.9.9": {"reason": "invalid"}})
        assert releases.releases[0].retirement is None

    def test_retirement_defaults(self) -> None:
        releases = merge_releases("p", [{"version": "1.0.0"}], {"1.0.0": {}})
        retirement = releases.releases[0].retirement
        assert retirement is not None
        assert retirement.reason == "other"
        assert retirement.message == ""

    def test_releases_without_version_are_skipped(self) -> None:
        releases = merge_releases("p", [{"inserted_at": "x"}, {"version": "0.1.0"}], {})
        assert [r.version for r in releases.releases] == ["0.1.0"]
