"""Structured form of a generated registration function.

Rather than formatting symbol names straight into Go source, the
generator first builds a :class:`RegistrationDocument`: an ordered list
of named sections, each an ordered list of :class:`Binding` pairs of a
symbol name and the Go expression that reaches it at runtime.  The
renderers in :mod:`gosym.renderers` decide how a document is printed;
this module only decides which bindings exist.

The expressions themselves come from a :class:`Dialect`, so the same
document can target a different interpreter's registry by changing a
handful of format strings.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Sequence, Tuple

from .model import SymbolSet

VALUE_SECTIONS = ("constants", "variables", "functions")


@dataclass
class Dialect:
    """Names and accessor formats used in generated Go code.

    ``value_accessor`` and ``type_accessor`` are :meth:`str.format`
    templates receiving ``package`` (the Go package name used as
    qualifier) and ``symbol``.
    """

    value_registry: str = "env.Packages"
    type_registry: str = "env.PackageTypes"
    value_map: str = "map[string]reflect.Value"
    type_map: str = "map[string]reflect.Type"
    value_accessor: str = "reflect.ValueOf({package}.{symbol})"
    type_accessor: str = "reflect.TypeOf((*{package}.{symbol})(nil)).Elem()"
    imports: Tuple[str, ...] = ("reflect",)

    def value_expression(self, package: str, symbol: str) -> str:
        return self.value_accessor.format(package=package, symbol=symbol)

    def type_expression(self, package: str, symbol: str) -> str:
        return self.type_accessor.format(package=package, symbol=symbol)


@dataclass
class Binding:
    """A symbol name bound to the expression that reads it."""

    symbol: str
    accessor: str


@dataclass
class Section:
    name: str
    bindings: List[Binding] = field(default_factory=list)

    def symbols(self) -> List[str]:
        return [b.symbol for b in self.bindings]


@dataclass
class RegistrationDocument:
    """Everything needed to print one registration function."""

    init_suffix: str
    package_path: str
    package_name: str
    dialect: Dialect
    value_sections: List[Section] = field(default_factory=list)
    type_section: Section = field(default_factory=lambda: Section("types"))

    @property
    def init_name(self) -> str:
        return f"init{self.init_suffix}"

    def section(self, name: str) -> Section:
        for section in [*self.value_sections, self.type_section]:
            if section.name == name:
                return section
        raise KeyError(name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "init": self.init_name,
            "path": self.package_path,
            "package": self.package_name,
            "values": {s.name: [asdict(b) for b in s.bindings] for s in self.value_sections},
            "types": [asdict(b) for b in self.type_section.bindings],
        }


def build_document(
    package_path: str,
    package_name: str,
    init_suffix: str,
    symbols: SymbolSet,
    dialect: Dialect | None = None,
) -> RegistrationDocument:
    """Turn a :class:`SymbolSet` into a :class:`RegistrationDocument`.

    Constants, variables and functions share the value registry because
    the interpreter does not tell them apart at lookup time; they keep
    separate sections only so that the generated code reads well.
    Every section lists its symbols in sorted order.
    """
    dialect = dialect or Dialect()
    document = RegistrationDocument(
        init_suffix=init_suffix,
        package_path=package_path,
        package_name=package_name,
        dialect=dialect,
    )
    for name in VALUE_SECTIONS:
        document.value_sections.append(
            Section(name, _bindings(symbols.sorted(name), package_name, dialect.value_expression))
        )
    document.type_section = Section(
        "types", _bindings(symbols.sorted("types"), package_name, dialect.type_expression)
    )
    return document


def _bindings(names: Sequence[str], package: str, accessor) -> List[Binding]:  # type: ignore[no-untyped-def]
    return [Binding(name, accessor(package, name)) for name in names]
