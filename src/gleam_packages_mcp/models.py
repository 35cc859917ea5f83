from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

TypeKind = Literal["opaque", "custom", "unknown"]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class ParameterInfo(_Frozen):
    label: str = ""
    type_name: str = "unknown"


class Implementations(_Frozen):
    gleam: bool = False
    uses_erlang_externals: bool = False
    uses_javascript_externals: bool = False
    can_run_on_erlang: bool = True
    can_run_on_javascript: bool = True


class FunctionInfo(_Frozen):
    name: str
    documentation: str = ""
    signature: str
    parameters: tuple[ParameterInfo, ...] = ()
    deprecation: str | None = None
    implementations: Implementations = Field(default_factory=Implementations)


class TypeInfo(_Frozen):
    name: str
    documentation: str = ""
    signature: str
    type_kind: TypeKind = "unknown"
    deprecation: str | None = None


class ConstantInfo(_Frozen):
    name: str
    documentation: str = ""
    type_name: str = "unknown"


class TypeAliasInfo(_Frozen):
    name: str
    documentation: str = ""
    type_name: str = "unknown"
    deprecation: str | None = None


class ModuleInfo(_Frozen):
    name: str
    documentation: str = ""
    functions: tuple[FunctionInfo, ...] = ()
    types: tuple[TypeInfo, ...] = ()
    constants: tuple[ConstantInfo, ...] = ()
    type_aliases: tuple[TypeAliasInfo, ...] = ()


class PackageInterface(_Frozen):
    name: str
    version: str
    gleam_version_constraint: str = ""
    modules: dict[str, ModuleInfo] = Field(default_factory=dict)


# --- hex.pm package metadata ---


class Retirement(_Frozen):
    reason: str = "other"
    message: str = ""


class Release(_Frozen):
    version: str
    inserted_at: str = ""
    has_docs: bool = False
    retirement: Retirement | None = None


class PackageReleases(_Frozen):
    name: str
    releases: tuple[Release, ...] = ()


class PackageInfo(_Frozen):
    name: str
    description: str = ""
    licenses: tuple[str, ...] = ()
    repository_url: str = ""
    hex_url: str = ""
    docs_url: str = ""
    latest_version: str = ""
    latest_stable_version: str = ""
    downloads_all: int = 0
    downloads_recent: int = 0
    inserted_at: str = ""
    updated_at: str = ""


class PackageSummary(_Frozen):
    name: str
    description: str = ""
    latest_version: str = ""
    downloads_all: int = 0
    hex_url: str = ""
