"""Type expressions appearing in API snapshots.

A type expression is a finite tree over six shapes, tagged by ``kind``:

- ``var``: a universally quantified type variable (``a``, ``msg``)
- ``function``: an arrow ``input -> output``
- ``tuple``: a tuple of items; zero items is the unit type ``()``
- ``named``: a qualified type constructor applied to arguments (``Maybe.Maybe a``)
- ``record``: a closed record ``{ x : Float, y : Float }``
- ``extensible_record``: an open record ``{ r | x : Float }``

Record field order is not part of a type's identity; every other position is.
"""

from __future__ import annotations

from typing import Annotated, Dict, List, Literal, Mapping, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class TypeVariable(BaseModel):
    """A type variable, identified by name."""
    kind: Literal["var"] = "var"
    name: str

    model_config = ConfigDict(frozen=True, extra="forbid")


class FunctionType(BaseModel):
    """A single arrow. Multi-argument functions are curried: ``a -> (b -> c)``."""
    kind: Literal["function"] = "function"
    input: TypeExpr
    output: TypeExpr

    model_config = ConfigDict(frozen=True, extra="forbid")


class TupleType(BaseModel):
    kind: Literal["tuple"] = "tuple"
    items: Tuple[TypeExpr, ...] = ()

    model_config = ConfigDict(frozen=True, extra="forbid")


class NamedType(BaseModel):
    """A type constructor, e.g. ``Dict.Dict`` applied to ``[String.String, a]``."""
    kind: Literal["named"] = "named"
    name: str  # Fully qualified: "Basics.Int", "List.List"
    args: Tuple[TypeExpr, ...] = ()

    model_config = ConfigDict(frozen=True, extra="forbid")


class RecordType(BaseModel):
    kind: Literal["record"] = "record"
    fields: Dict[str, TypeExpr] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, extra="forbid")


class ExtensibleRecordType(BaseModel):
    """An open record: ``extension`` is the row variable standing for the other fields."""
    kind: Literal["extensible_record"] = "extensible_record"
    extension: str
    fields: Dict[str, TypeExpr] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, extra="forbid")


TypeExpr = Annotated[
    Union[
        TypeVariable,
        FunctionType,
        TupleType,
        NamedType,
        RecordType,
        ExtensibleRecordType,
    ],
    Field(discriminator="kind"),
]


for _model in (TypeVariable, FunctionType, TupleType, NamedType, RecordType, ExtensibleRecordType):
    _model.model_rebuild()


# Builders (used by collaborators constructing snapshots in code, and by tests)

def var(name: str) -> TypeVariable:
    return TypeVariable(name=name)


def fn(*types: TypeExpr) -> FunctionType:
    """Build a curried function type: ``fn(a, b, c)`` is ``a -> b -> c``."""
    if len(types) < 2:
        raise ValueError(f"fn() needs at least an input and an output type, got {len(types)}")
    result = types[-1]
    for arg in reversed(types[:-1]):
        result = FunctionType(input=arg, output=result)
    return result


def tuple_of(*items: TypeExpr) -> TupleType:
    return TupleType(items=items)


def unit() -> TupleType:
    return TupleType(items=())


def named(name: str, *args: TypeExpr) -> NamedType:
    return NamedType(name=name, args=args)


def record(**fields: TypeExpr) -> RecordType:
    return RecordType(fields=fields)


def ext_record(extension: str, **fields: TypeExpr) -> ExtensibleRecordType:
    return ExtensibleRecordType(extension=extension, fields=fields)


def type_variables(expr: TypeExpr) -> List[str]:
    """Return the variable names of ``expr`` in first-encounter order, without duplicates.

    Extension variables of open records count as variables.
    """
    seen: Dict[str, None] = {}

    def visit(node: TypeExpr) -> None:
        if isinstance(node, TypeVariable):
            seen.setdefault(node.name, None)
        elif isinstance(node, FunctionType):
            visit(node.input)
            visit(node.output)
        elif isinstance(node, TupleType):
            for item in node.items:
                visit(item)
        elif isinstance(node, NamedType):
            for arg in node.args:
                visit(arg)
        elif isinstance(node, ExtensibleRecordType):
            seen.setdefault(node.extension, None)
            for field_type in node.fields.values():
                visit(field_type)
        elif isinstance(node, RecordType):
            for field_type in node.fields.values():
                visit(field_type)

    visit(expr)
    return list(seen)


def rename_variables(expr: TypeExpr, mapping: Mapping[str, str]) -> TypeExpr:
    """Return a copy of ``expr`` with variables renamed through ``mapping``.

    Names missing from ``mapping`` are kept as they are.
    """
    if isinstance(expr, TypeVariable):
        return TypeVariable(name=mapping.get(expr.name, expr.name))
    if isinstance(expr, FunctionType):
        return FunctionType(
            input=rename_variables(expr.input, mapping),
            output=rename_variables(expr.output, mapping),
        )
    if isinstance(expr, TupleType):
        return TupleType(items=tuple(rename_variables(item, mapping) for item in expr.items))
    if isinstance(expr, NamedType):
        return NamedType(name=expr.name, args=tuple(rename_variables(arg, mapping) for arg in expr.args))
    if isinstance(expr, ExtensibleRecordType):
        return ExtensibleRecordType(
            extension=mapping.get(expr.extension, expr.extension),
            fields={name: rename_variables(t, mapping) for name, t in expr.fields.items()},
        )
    if isinstance(expr, RecordType):
        return RecordType(fields={name: rename_variables(t, mapping) for name, t in expr.fields.items()})
    raise TypeError(f"Not a type expression: {type(expr).__name__}")
