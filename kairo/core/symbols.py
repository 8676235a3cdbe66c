from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, Optional

from .span import SourceSpan


class Mutability(Enum):
    IMMUTABLE = "immutable"
    MUTABLE = "mutable"


@dataclass
class Symbol:
    name: str
    mutability: Mutability
    location: Optional[SourceSpan] = None

    @property
    def is_mutable(self) -> bool:
        return self.mutability is Mutability.MUTABLE


class SymbolTable:
    """Program-wide name -> mutability map.

    There is a single scope. A name is written once, on its first
    declaration, and its mutability never changes afterwards.
    """

    def __init__(self):
        self.symbols: Dict[str, Symbol] = {}

    def define(self, symbol: Symbol) -> bool:
        if symbol.name in self.symbols:
            return False
        self.symbols[symbol.name] = symbol
        return True

    def declare(self, name: str, mutability: Mutability,
                location: Optional[SourceSpan] = None) -> bool:
        return self.define(Symbol(name, mutability, location))

    def lookup(self, name: str) -> Optional[Symbol]:
        return self.symbols.get(name)

    def mutability_of(self, name: str) -> Optional[Mutability]:
        symbol = self.lookup(name)
        return symbol.mutability if symbol else None

    def is_mutable(self, name: str) -> bool:
        return self.mutability_of(name) is Mutability.MUTABLE

    def has_mutable(self) -> bool:
        return any(s.is_mutable for s in self.symbols.values())

    def as_dict(self) -> Dict[str, Mutability]:
        return {name: s.mutability for name, s in self.symbols.items()}

    def __contains__(self, name: str) -> bool:
        return name in self.symbols

    def __iter__(self) -> Iterator[str]:
        return iter(self.symbols)

    def __len__(self) -> int:
        return len(self.symbols)
