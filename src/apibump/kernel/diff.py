"""Structural diff between two package API snapshots.

Entities are paired by name. A name present only in the later snapshot is
added, only in the earlier snapshot is removed, and present in both is
changed unless the kind-specific equivalence check says the two declarations
are the same API commitment.

Output order is fixed for fixed inputs: ``added`` follows the later
snapshot's declaration order, ``removed`` and ``changed`` follow the earlier
snapshot's.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, List, Mapping, TypeVar

from apibump.logging import get_logger

from .equivalence import Renaming, types_equivalent
from .snapshot import (
    AliasDecl,
    BinopDecl,
    ModuleSnapshot,
    PackageSnapshot,
    UnionDecl,
    ValueDecl,
)

log = get_logger(__name__)

E = TypeVar("E")


@dataclass(frozen=True)
class Changed(Generic[E]):
    """An entity present in both snapshots whose declarations differ."""
    old: E
    new: E


@dataclass(frozen=True)
class Changes(Generic[E]):
    """Added/removed/changed entities of one kind, keyed by name."""
    added: Dict[str, E] = field(default_factory=dict)
    removed: Dict[str, E] = field(default_factory=dict)
    changed: Dict[str, Changed[E]] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.removed or self.changed)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly form. Entities are dumped with their pydantic model."""
        return {
            "added": {name: _dump(e) for name, e in self.added.items()},
            "removed": {name: _dump(e) for name, e in self.removed.items()},
            "changed": {
                name: {"old": _dump(c.old), "new": _dump(c.new)}
                for name, c in self.changed.items()
            },
        }


@dataclass(frozen=True)
class ModuleChanges:
    """Differences inside one module present in both snapshots."""
    name: str
    unions: Changes[UnionDecl] = field(default_factory=Changes)
    aliases: Changes[AliasDecl] = field(default_factory=Changes)
    values: Changes[ValueDecl] = field(default_factory=Changes)
    binops: Changes[BinopDecl] = field(default_factory=Changes)

    def by_kind(self) -> Dict[str, Changes]:
        return {
            "union": self.unions,
            "alias": self.aliases,
            "value": self.values,
            "binop": self.binops,
        }

    @property
    def is_empty(self) -> bool:
        return all(c.is_empty for c in self.by_kind().values())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "unions": self.unions.to_dict(),
            "aliases": self.aliases.to_dict(),
            "values": self.values.to_dict(),
            "binops": self.binops.to_dict(),
        }


@dataclass(frozen=True)
class PackageChanges:
    """Module-level differences between two package snapshots.

    ``modules_changed`` only holds modules with at least one difference.
    """
    modules_added: List[str] = field(default_factory=list)
    modules_removed: List[str] = field(default_factory=list)
    modules_changed: Dict[str, ModuleChanges] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not (self.modules_added or self.modules_removed or self.modules_changed)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "modules_added": list(self.modules_added),
            "modules_removed": list(self.modules_removed),
            "modules_changed": {name: mc.to_dict() for name, mc in self.modules_changed.items()},
        }


def _dump(entity: Any) -> Any:
    return entity.model_dump(mode="json") if hasattr(entity, "model_dump") else entity


def diff_named(
    earlier: Mapping[str, E],
    later: Mapping[str, E],
    is_unchanged: Callable[[E, E], bool],
) -> Changes[E]:
    """Partition two name-keyed collections into added/removed/changed.

    Pairs for which ``is_unchanged(old, new)`` holds are dropped.
    """
    added = {name: entity for name, entity in later.items() if name not in earlier}
    removed = {name: entity for name, entity in earlier.items() if name not in later}
    changed: Dict[str, Changed[E]] = {}
    for name, old in earlier.items():
        if name not in later:
            continue
        new = later[name]
        if not is_unchanged(old, new):
            changed[name] = Changed(old=old, new=new)
    return Changes(added=added, removed=removed, changed=changed)


def _seed_params(old_params, new_params) -> Renaming | None:
    """Pair declared type parameters positionally. None if counts differ."""
    if len(old_params) != len(new_params):
        return None
    renaming = Renaming()
    for old, new in zip(old_params, new_params):
        if not renaming.bind(old, new):
            return None
    return renaming


def values_equivalent(old: ValueDecl, new: ValueDecl) -> bool:
    return types_equivalent(old.type, new.type)


def aliases_equivalent(old: AliasDecl, new: AliasDecl) -> bool:
    """Same arity and equivalent right-hand sides, parameters included in the renaming."""
    renaming = _seed_params(old.params, new.params)
    if renaming is None:
        return False
    return types_equivalent(old.type, new.type, renaming)


def unions_equivalent(old: UnionDecl, new: UnionDecl) -> bool:
    """Same arity, same variant names, and per variant the same argument types.

    Variants are matched by name; their declaration order does not matter.
    Argument order inside a variant does.
    """
    renaming = _seed_params(old.params, new.params)
    if renaming is None:
        return False
    old_tags = old.tags_by_name()
    new_tags = new.tags_by_name()
    if set(old_tags) != set(new_tags):
        return False
    for name, old_tag in old_tags.items():
        new_args = new_tags[name].args
        if len(old_tag.args) != len(new_args):
            return False
        for old_arg, new_arg in zip(old_tag.args, new_args):
            if not types_equivalent(old_arg, new_arg, renaming):
                return False
    return True


def binops_equivalent(old: BinopDecl, new: BinopDecl) -> bool:
    return (
        old.associativity == new.associativity
        and old.precedence == new.precedence
        and types_equivalent(old.type, new.type)
    )


def diff_module(earlier: ModuleSnapshot, later: ModuleSnapshot) -> ModuleChanges:
    """Diff each entity kind of a module independently."""
    changes = ModuleChanges(
        name=later.name,
        unions=diff_named(earlier.unions_by_name(), later.unions_by_name(), unions_equivalent),
        aliases=diff_named(earlier.aliases_by_name(), later.aliases_by_name(), aliases_equivalent),
        values=diff_named(earlier.values_by_name(), later.values_by_name(), values_equivalent),
        binops=diff_named(earlier.binops_by_name(), later.binops_by_name(), binops_equivalent),
    )
    if not changes.is_empty:
        log.debug(
            "module_changed",
            module=changes.name,
            **{
                kind: [len(c.added), len(c.removed), len(c.changed)]
                for kind, c in changes.by_kind().items()
                if not c.is_empty
            },
        )
    return changes


def diff_package(earlier: PackageSnapshot, later: PackageSnapshot) -> PackageChanges:
    """Diff module sets, then modules present in both snapshots.

    Modules present in both with no differences are omitted.
    """
    earlier_modules = earlier.modules_by_name()
    later_modules = later.modules_by_name()

    modules_added = [name for name in later_modules if name not in earlier_modules]
    modules_removed = [name for name in earlier_modules if name not in later_modules]

    modules_changed: Dict[str, ModuleChanges] = {}
    for name, old_module in earlier_modules.items():
        new_module = later_modules.get(name)
        if new_module is None:
            continue
        module_changes = diff_module(old_module, new_module)
        if not module_changes.is_empty:
            modules_changed[name] = module_changes

    return PackageChanges(
        modules_added=modules_added,
        modules_removed=modules_removed,
        modules_changed=modules_changed,
    )
