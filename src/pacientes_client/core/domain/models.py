"""Modelos del dominio (Pydantic v2).

Por qué tan pocos modelos:
- El paciente es un registro opaco definido por el backend; esta capa solo lo
  transporta, no lo valida ni lo interpreta.
- Lo único que sí tiene forma fija es el sobre de respuesta HTTP.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

# Registro de paciente tal como lo define el backend. La clave natural es `cedula`.
Paciente = dict[str, Any]

# Cédula: número de identidad nacional; puede llegar como texto o como número.
Cedula = str | int


class ApiResponse(BaseModel):
    """Respuesta exitosa del backend ya decodificada.

    Por qué existe:
    - Desacopla a los servicios del objeto `httpx.Response` (tests sin red).
    - Conserva el status por si el llamador necesita distinguir 200/201/204.
    """

    model_config = ConfigDict(frozen=True)

    status_code: int = Field(
        ...,
        ge=100,
        le=599,
        description="Código HTTP devuelto por el backend.",
    )
    data: Any = Field(
        default=None,
        description="Cuerpo JSON decodificado (texto crudo si no es JSON, None si vacío).",
    )
