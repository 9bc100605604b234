from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

from typeschema.base.type_oracle import DeclKind, Declaration

DEFAULT_EXPORT = "default"

DECLARATION_KINDS = {
    DeclKind.VARIABLE,
    DeclKind.FUNCTION,
    DeclKind.CLASS,
    DeclKind.INTERFACE,
    DeclKind.TYPE_ALIAS,
    DeclKind.ENUM,
}


class ExportKind(str, Enum):
    NAMED = "named"
    DEFAULT = "default"


@dataclass(frozen=True)
class ExportedBinding:
    name: str
    kind: ExportKind
    # local symbol the oracle is asked about; None for re-exports of another module
    symbol: Optional[str]


def _contributions(decl: Declaration):
    if decl.kind == DeclKind.EXPORT_CLAUSE:
        if decl.type_only:
            return
        for spec in decl.specifiers:
            if not spec.type_only:
                yield spec.exported, spec.local if decl.source is None else None
        return

    if decl.kind == DeclKind.EXPORT_DEFAULT:
        yield DEFAULT_EXPORT, decl.names[0] if decl.names else DEFAULT_EXPORT
        return

    if decl.kind in DECLARATION_KINDS and decl.exported:
        if decl.default:
            yield DEFAULT_EXPORT, decl.names[0] if decl.names else DEFAULT_EXPORT
            return
        for name in decl.names:
            yield name, name


def enumerate_exports(declarations: Iterable[Declaration]) -> List[ExportedBinding]:
    """Exported bindings of a module in source order.

    Names are deduplicated on first occurrence, which also means a second
    default export is ignored.
    """
    seen = set()
    bindings = []
    for decl in declarations:
        for name, symbol in _contributions(decl):
            if name in seen:
                continue
            seen.add(name)
            kind = ExportKind.DEFAULT if name == DEFAULT_EXPORT else ExportKind.NAMED
            bindings.append(ExportedBinding(name=name, kind=kind, symbol=symbol))
    return bindings
