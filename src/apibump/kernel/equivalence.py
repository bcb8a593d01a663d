"""Type equivalence up to consistent renaming of type variables.

Two type expressions are the same API commitment when one can be turned into
the other by a bijective renaming of its type variables. ``a -> List a`` and
``x -> List x`` are equivalent; ``a -> b -> a`` and ``x -> y -> y`` are not.

The renaming is built greedily during one parallel traversal of both trees:
the first time an earlier variable meets a later variable the pair is fixed,
and every later encounter must agree with it in both directions.
"""

from typing import Dict, Optional

from .types import (
    ExtensibleRecordType,
    FunctionType,
    NamedType,
    RecordType,
    TupleType,
    TypeExpr,
    TypeVariable,
)


class Renaming:
    """Earlier-name -> later-name variable mapping that must remain a bijection.

    One instance is scoped to one top-level comparison (a value signature, or
    a whole alias/union declaration including its parameters).
    """

    def __init__(self) -> None:
        self._forward: Dict[str, str] = {}
        self._backward: Dict[str, str] = {}

    def bind(self, old: str, new: str) -> bool:
        """Record ``old -> new``, or check it against the existing pairing.

        Returns False when ``old`` is already paired with another name, or
        ``new`` is already the target of another earlier name.
        """
        current = self._forward.get(old)
        if current is not None:
            return current == new
        if new in self._backward:
            return False
        self._forward[old] = new
        self._backward[new] = old
        return True


def types_equivalent(old: TypeExpr, new: TypeExpr, renaming: Optional[Renaming] = None) -> bool:
    """Return True if ``old`` and ``new`` are equal up to consistent variable renaming.

    Args:
        old: Type expression from the earlier snapshot
        new: Type expression from the later snapshot
        renaming: Pairing to extend (e.g. pre-seeded with declared parameters).
            A fresh one is used when omitted. It is updated in place.
    """
    if renaming is None:
        renaming = Renaming()
    return _equivalent(old, new, renaming)


def _equivalent(old: TypeExpr, new: TypeExpr, renaming: Renaming) -> bool:
    if isinstance(old, TypeVariable):
        return isinstance(new, TypeVariable) and renaming.bind(old.name, new.name)

    if isinstance(old, FunctionType):
        return (
            isinstance(new, FunctionType)
            and _equivalent(old.input, new.input, renaming)
            and _equivalent(old.output, new.output, renaming)
        )

    if isinstance(old, TupleType):
        return isinstance(new, TupleType) and _all_equivalent(old.items, new.items, renaming)

    if isinstance(old, NamedType):
        return (
            isinstance(new, NamedType)
            and old.name == new.name
            and _all_equivalent(old.args, new.args, renaming)
        )

    if isinstance(old, ExtensibleRecordType):
        return (
            isinstance(new, ExtensibleRecordType)
            and renaming.bind(old.extension, new.extension)
            and _fields_equivalent(old.fields, new.fields, renaming)
        )

    if isinstance(old, RecordType):
        return isinstance(new, RecordType) and _fields_equivalent(old.fields, new.fields, renaming)

    return False


def _all_equivalent(old_items, new_items, renaming: Renaming) -> bool:
    if len(old_items) != len(new_items):
        return False
    return all(_equivalent(o, n, renaming) for o, n in zip(old_items, new_items))


def _fields_equivalent(old_fields: Dict[str, TypeExpr], new_fields: Dict[str, TypeExpr], renaming: Renaming) -> bool:
    if set(old_fields) != set(new_fields):
        return False
    # Walk in the earlier declaration order; field order itself is irrelevant
    return all(_equivalent(t, new_fields[name], renaming) for name, t in old_fields.items())
