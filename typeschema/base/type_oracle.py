from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Tuple


class DeclKind:
    VARIABLE = "variable"
    FUNCTION = "function"
    CLASS = "class"
    INTERFACE = "interface"
    TYPE_ALIAS = "type_alias"
    ENUM = "enum"
    EXPORT_CLAUSE = "export_clause"
    EXPORT_DEFAULT = "export_default"


@dataclass(frozen=True)
class ExportSpecifier:
    local: str
    exported: str
    type_only: bool = False


@dataclass(frozen=True)
class Member:
    """One interface member; methods carry an arrow type in ``type_text``."""

    name: str
    type_text: str
    optional: bool = False


@dataclass(frozen=True)
class Declaration:
    kind: str
    names: Tuple[str, ...] = ()
    exported: bool = False
    default: bool = False
    type_only: bool = False
    specifiers: Tuple[ExportSpecifier, ...] = ()
    members: Tuple[Member, ...] = ()
    extends: Tuple[str, ...] = ()
    value_text: Optional[str] = None
    source: Optional[str] = None


class TypeOracle(ABC):
    @abstractmethod
    def declarations(self) -> List[Declaration]:
        pass

    @abstractmethod
    def type_of(self, symbol: str) -> Optional[str]:
        """Printable, widened type text of a top-level symbol, or None if unknown."""
        pass
