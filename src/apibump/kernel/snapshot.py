"""Pydantic models for package API snapshots with strict validation."""

from typing import Dict, Iterable, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .types import TypeExpr


def _reject_duplicates(names: Iterable[str], label: str) -> None:
    seen = set()
    duplicates = set()
    for name in names:
        if name in seen:
            duplicates.add(name)
        seen.add(name)
    if duplicates:
        # Stable-sorted for deterministic error messages
        raise ValueError(f"Duplicate {label} names not allowed: {sorted(duplicates)}")


class Tag(BaseModel):
    """One variant of a union, e.g. ``Just a``."""
    name: str
    args: Tuple[TypeExpr, ...] = ()

    model_config = ConfigDict(frozen=True, extra="forbid")


class UnionDecl(BaseModel):
    """A custom type (sum type): ``type Maybe a = Just a | Nothing``."""
    name: str
    params: Tuple[str, ...] = ()
    tags: Tuple[Tag, ...] = ()

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("params")
    @classmethod
    def validate_params(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        _reject_duplicates(v, "type parameter")
        return v

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: Tuple[Tag, ...]) -> Tuple[Tag, ...]:
        _reject_duplicates((t.name for t in v), "variant")
        return v

    def tags_by_name(self) -> Dict[str, Tag]:
        return {t.name: t for t in self.tags}


class AliasDecl(BaseModel):
    """A type alias: ``type alias Pair a = (a, a)``."""
    name: str
    params: Tuple[str, ...] = ()
    type: TypeExpr

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("params")
    @classmethod
    def validate_params(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        _reject_duplicates(v, "type parameter")
        return v


class ValueDecl(BaseModel):
    """A value or function with its type signature."""
    name: str
    type: TypeExpr

    model_config = ConfigDict(frozen=True, extra="forbid")


class BinopDecl(BaseModel):
    """An infix operator: its type plus its parsing behavior."""
    name: str  # Operator symbol, e.g. "|>"
    type: TypeExpr
    associativity: Literal["left", "right", "non"]
    precedence: int = Field(..., ge=0, le=9)

    model_config = ConfigDict(frozen=True, extra="forbid")


class ModuleSnapshot(BaseModel):
    """Public API of one module. Names are unique within each collection."""
    name: str
    unions: Tuple[UnionDecl, ...] = ()
    aliases: Tuple[AliasDecl, ...] = ()
    values: Tuple[ValueDecl, ...] = ()
    binops: Tuple[BinopDecl, ...] = ()

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("unions")
    @classmethod
    def validate_unions(cls, v: Tuple[UnionDecl, ...]) -> Tuple[UnionDecl, ...]:
        _reject_duplicates((u.name for u in v), "union")
        return v

    @field_validator("aliases")
    @classmethod
    def validate_aliases(cls, v: Tuple[AliasDecl, ...]) -> Tuple[AliasDecl, ...]:
        _reject_duplicates((a.name for a in v), "alias")
        return v

    @field_validator("values")
    @classmethod
    def validate_values(cls, v: Tuple[ValueDecl, ...]) -> Tuple[ValueDecl, ...]:
        _reject_duplicates((d.name for d in v), "value")
        return v

    @field_validator("binops")
    @classmethod
    def validate_binops(cls, v: Tuple[BinopDecl, ...]) -> Tuple[BinopDecl, ...]:
        _reject_duplicates((b.name for b in v), "binop")
        return v

    # Insertion-ordered lookups; iteration order is declaration order

    def unions_by_name(self) -> Dict[str, UnionDecl]:
        return {u.name: u for u in self.unions}

    def aliases_by_name(self) -> Dict[str, AliasDecl]:
        return {a.name: a for a in self.aliases}

    def values_by_name(self) -> Dict[str, ValueDecl]:
        return {d.name: d for d in self.values}

    def binops_by_name(self) -> Dict[str, BinopDecl]:
        return {b.name: b for b in self.binops}


class PackageSnapshot(BaseModel):
    """Public API of a package at one version: its exposed modules."""
    name: Optional[str] = None  # e.g. "elm/core"
    version: Optional[str] = None  # "MAJOR.MINOR.PATCH", informational for diffing
    modules: Tuple[ModuleSnapshot, ...] = ()

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("modules")
    @classmethod
    def validate_modules(cls, v: Tuple[ModuleSnapshot, ...]) -> Tuple[ModuleSnapshot, ...]:
        _reject_duplicates((m.name for m in v), "module")
        return v

    def modules_by_name(self) -> Dict[str, ModuleSnapshot]:
        return {m.name: m for m in self.modules}
