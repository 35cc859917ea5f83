"""Plain-text renderings of decoded entities for MCP ``content`` blocks."""

from __future__ import annotations

from collections.abc import Sequence

from gleam_packages_mcp.core.search import FunctionMatch, TypeMatch
from gleam_packages_mcp.models import (
    FunctionInfo,
    ModuleInfo,
    PackageInfo,
    PackageInterface,
    PackageReleases,
    PackageSummary,
    TypeInfo,
)

_DOC_PREVIEW_LENGTH = 160


def _first_paragraph(doc: str) -> str:
    text = doc.strip().split("\n\n", 1)[0].replace("\n", " ").strip()
    if len(text) > _DOC_PREVIEW_LENGTH:
        return text[: _DOC_PREVIEW_LENGTH - 3] + "..."
    return text


def _platforms(fn: FunctionInfo) -> str:
    targets = []
    if fn.implementations.can_run_on_erlang:
        targets.append("erlang")
    if fn.implementations.can_run_on_javascript:
        targets.append("javascript")
    return ", ".join(targets) if targets else "none"


def format_package_search(query: str, packages: Sequence[PackageSummary]) -> str:
    if not packages:
        return f"No packages found for '{query}'."
    lines = [f"Found {len(packages)} package(s) for '{query}':", ""]
    for pkg in packages:
        version = f" v{pkg.latest_version}" if pkg.latest_version else ""
        lines.append(f"- {pkg.name}{version} ({pkg.downloads_all} downloads)")
        if pkg.description:
            lines.append(f"  {pkg.description}")
    return "\n".join(lines)


def format_package_info(info: PackageInfo) -> str:
    lines = [f"# {info.name}"]
    if info.description:
        lines += ["", info.description]
    lines.append("")
    lines.append(f"Latest version: {info.latest_version or 'unknown'}")
    if info.latest_stable_version and info.latest_stable_version != info.latest_version:
        lines.append(f"Latest stable version: {info.latest_stable_version}")
    if info.licenses:
        lines.append(f"Licenses: {', '.join(info.licenses)}")
    lines.append(f"Downloads: {info.downloads_all} total, {info.downloads_recent} recent")
    if info.repository_url:
        lines.append(f"Repository: {info.repository_url}")
    if info.hex_url:
        lines.append(f"Hex: {info.hex_url}")
    if info.docs_url:
        lines.append(f"Docs: {info.docs_url}")
    return "\n".join(lines)


def format_module_list(interface: PackageInterface, names: Sequence[str]) -> str:
    lines = [f"{interface.name} v{interface.version} has {len(names)} module(s):", ""]
    for name in names:
        summary = _first_paragraph(interface.modules[name].documentation)
        lines.append(f"- {name}: {summary}" if summary else f"- {name}")
    return "\n".join(lines)


def _format_function(fn: FunctionInfo) -> list[str]:
    lines = [f"  {fn.signature}"]
    if fn.deprecation is not None:
        lines.append(f"    Deprecated: {fn.deprecation}")
    summary = _first_paragraph(fn.documentation)
    if summary:
        lines.append(f"    {summary}")
    return lines


def _format_type(t: TypeInfo) -> list[str]:
    head, *rest = t.signature.split("\n")
    if t.type_kind == "opaque":
        head = f"opaque {head}"
    lines = [f"  {head}", *(f"  {line}" for line in rest)]
    if t.deprecation is not None:
        lines.append(f"    Deprecated: {t.deprecation}")
    summary = _first_paragraph(t.documentation)
    if summary:
        lines.append(f"    {summary}")
    return lines


def format_module(package: str, module: ModuleInfo) -> str:
    lines = [f"# {package}/{module.name}"]
    if module.documentation.strip():
        lines += ["", module.documentation.strip()]
    if module.types:
        lines += ["", f"Types ({len(module.types)}):"]
        for t in module.types:
            lines += _format_type(t)
    if module.type_aliases:
        lines += ["", f"Type aliases ({len(module.type_aliases)}):"]
        for alias in module.type_aliases:
            lines.append(f"  type {alias.name} = {alias.type_name}")
            if alias.deprecation is not None:
                lines.append(f"    Deprecated: {alias.deprecation}")
    if module.constants:
        lines += ["", f"Constants ({len(module.constants)}):"]
        for const in module.constants:
            lines.append(f"  const {const.name}: {const.type_name}")
    if module.functions:
        lines += ["", f"Functions ({len(module.functions)}):"]
        for fn in module.functions:
            lines += _format_function(fn)
            lines.append(f"    Targets: {_platforms(fn)}")
    return "\n".join(lines)


def format_function_matches(package: str, query: str, matches: Sequence[FunctionMatch], total: int) -> str:
    if not matches:
        return f"No functions matching '{query}' in {package}."
    lines = [f"Found {total} function(s) matching '{query}' in {package}:"]
    if total > len(matches):
        lines[0] += f" (showing {len(matches)})"
    for module, fn in matches:
        lines.append("")
        lines.append(f"{module}.{fn.name}")
        lines += _format_function(fn)
    return "\n".join(lines)


def format_type_matches(package: str, query: str, matches: Sequence[TypeMatch], total: int) -> str:
    if not matches:
        return f"No types matching '{query}' in {package}."
    lines = [f"Found {total} type(s) matching '{query}' in {package}:"]
    if total > len(matches):
        lines[0] += f" (showing {len(matches)})"
    for module, t in matches:
        lines.append("")
        lines.append(f"{module}.{t.name}")
        lines += _format_type(t)
    return "\n".join(lines)


def format_releases(releases: PackageReleases) -> str:
    if not releases.releases:
        return f"{releases.name} has no releases."
    lines = [f"{releases.name} has {len(releases.releases)} release(s):", ""]
    for release in releases.releases:
        line = f"- {release.version}"
        if release.inserted_at:
            line += f" ({release.inserted_at})"
        if not release.has_docs:
            line += " [no docs]"
        if release.retirement is not None:
            line += f" RETIRED: {release.retirement.reason}"
            if release.retirement.message:
                line += f" - {release.retirement.message}"
        lines.append(line)
    return "\n".join(lines)
