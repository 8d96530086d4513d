"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Any, Iterable

from rich.table import Table

from pacientes_client.core.domain.models import Paciente

# Columnas preferidas si el backend las envía; el resto se muestra en orden de llegada.
PREFERRED_COLUMNS = ("cedula", "nombres", "apellidos", "email", "telefono", "estado")


def _columns_for(pacientes: list[Paciente]) -> list[str]:
    seen: list[str] = []
    for paciente in pacientes:
        for key in paciente.keys():
            if key not in seen:
                seen.append(key)
    preferred = [c for c in PREFERRED_COLUMNS if c in seen]
    return preferred + [c for c in seen if c not in preferred]


def _cell(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, bool):
        return "sí" if value else "no"
    return str(value)


def build_pacientes_table(pacientes: Iterable[Paciente]) -> Table:
    """Crea una tabla Rich con las columnas que el backend haya enviado."""

    rows = [p for p in pacientes if isinstance(p, dict)]
    table = Table(title=f"Pacientes ({len(rows)})")
    columns = _columns_for(rows)
    for name in columns:
        style = "cyan" if name == "cedula" else "white"
        table.add_column(name, style=style, no_wrap=name == "cedula")
    for paciente in rows:
        table.add_row(*(_cell(paciente.get(name)) for name in columns))
    return table
