"""
CLI commands for class introspection.

Commands:
- reflectkit members TYPE     - List fields and methods across the MRO
- reflectkit constants TYPE   - List constants of an enumerated type
- reflectkit get TYPE FIELD   - Read a static field through the access gate
"""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.table import Table

from ..enumerated import EnumeratedMeta
from ..exceptions import ReflectionError, type_name
from ..fields import get_static_field_value
from ..lookup import declared_fields, declared_methods, get_class, get_field
from ..members import format_modifiers

console = Console()
err = Console(stderr=True)


def _type_label(tp: Any) -> str:
    if isinstance(tp, type):
        return tp.__qualname__
    return str(tp)


def _resolve(type_name_arg: str) -> type | None:
    try:
        return get_class(type_name_arg)
    except ReflectionError as e:
        err.print(f"[red]{e}[/red]")
        return None


# ============================================================================
# reflectkit members
# ============================================================================


def run_members(type_name_arg: str, json_output: bool = False) -> int:
    """
    List fields and methods declared by a class and its parents.

    Args:
        type_name_arg: Fully qualified class name
        json_output: Output as JSON

    Returns:
        Exit code (0 = success, 1 = class not found)
    """
    cls = _resolve(type_name_arg)
    if cls is None:
        return 1

    rows: list[dict[str, Any]] = []
    for klass in cls.__mro__:
        if klass is object:
            continue
        for field in declared_fields(klass):
            rows.append(
                {
                    "kind": "field",
                    "declared_in": type_name(klass),
                    "name": field.name,
                    "modifiers": format_modifiers(field.modifiers),
                    "type": _type_label(field.type),
                }
            )
        for method in declared_methods(klass):
            params = method.parameter_types
            signature = "(...)" if params is None else "(" + ", ".join(_type_label(p) for p in params) + ")"
            rows.append(
                {
                    "kind": "method",
                    "declared_in": type_name(klass),
                    "name": method.name,
                    "modifiers": format_modifiers(method.modifiers),
                    "type": f"{signature} -> {_type_label(method.return_type)}",
                }
            )

    if json_output:
        print(json.dumps({"type": type_name(cls), "members": rows}, indent=2))
        return 0

    table = Table(title=f"Members of {type_name(cls)}")
    table.add_column("Kind", style="cyan")
    table.add_column("Name")
    table.add_column("Modifiers")
    table.add_column("Type")
    table.add_column("Declared in", style="dim")
    for row in rows:
        table.add_row(row["kind"], row["name"], row["modifiers"], row["type"], row["declared_in"])
    console.print(table)
    return 0


# ============================================================================
# reflectkit constants
# ============================================================================


def run_constants(type_name_arg: str, json_output: bool = False) -> int:
    """List the constants of an enumerated type in ordinal order."""
    cls = _resolve(type_name_arg)
    if cls is None:
        return 1
    if not isinstance(cls, EnumeratedMeta):
        err.print(f"[red]'{type_name(cls)}' is not an enumerated type[/red]")
        return 1

    constants = cls.constants()
    if json_output:
        output = {
            "type": type_name(cls),
            "constants": [{"ordinal": c.ordinal, "name": c.name} for c in constants],
        }
        print(json.dumps(output, indent=2))
        return 0

    table = Table(title=f"Constants of {type_name(cls)}")
    table.add_column("Ordinal", justify="right")
    table.add_column("Name", style="cyan")
    for constant in constants:
        table.add_row(str(constant.ordinal), constant.name)
    console.print(table)
    return 0


# ============================================================================
# reflectkit get
# ============================================================================


def run_get(type_name_arg: str, field_name: str) -> int:
    """Print the value of a static field, bypassing its visibility."""
    cls = _resolve(type_name_arg)
    if cls is None:
        return 1

    try:
        field = get_field(cls, field_name)
        if not field.is_static:
            err.print(f"[red]Field '{field_name}' of '{type_name(cls)}' is not static[/red]")
            return 1
        value = get_static_field_value(cls, field)
    except ReflectionError as e:
        err.print(f"[red]{e}[/red]")
        return 1

    print(repr(value))
    return 0
