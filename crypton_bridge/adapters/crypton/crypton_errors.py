"""
Clasificacion de errores de Crypton.

El exchange no expone codigos de error estructurados: la unica
senal es el booleano 'success' en el objeto JSON de nivel superior.
"""

import json
from dataclasses import dataclass
from typing import Any, Optional

from ...core.exceptions import ExchangeError


@dataclass(frozen=True)
class ResponseCheck:
    """
    Resultado de clasificar un cuerpo de respuesta.

    Ok(payload) cuando success es verdadero o el cuerpo no es un
    objeto JSON; Err(body) cuando success es falso o falta.
    """
    success: bool
    body: str
    payload: Optional[Any] = None

    @property
    def is_success(self) -> bool:
        return self.success

    @property
    def is_json(self) -> bool:
        return self.payload is not None

    def raise_for_failure(self, exchange_id: str) -> None:
        """
        Raises:
            ExchangeError: Si el exchange reporto un fallo
        """
        if not self.success:
            raise ExchangeError(f"{exchange_id} {self.body}", exchange_id, self.body)


def classify_response(body: Optional[str]) -> ResponseCheck:
    """
    Clasificar el cuerpo crudo de una respuesta.

    Los cuerpos que no empiezan con '{' (paginas de error HTML,
    texto plano) pasan sin clasificar; quedan para el transporte.
    """
    if not body or body[0] != "{":
        return ResponseCheck(success=True, body=body or "")
    try:
        response = json.loads(body)
    except ValueError:
        return ResponseCheck(success=True, body=body)
    success = bool(response.get("success")) if isinstance(response, dict) else False
    return ResponseCheck(success=success, body=body, payload=response)


def handle_errors(exchange_id: str, body: Optional[str]) -> ResponseCheck:
    """
    Clasificar y lanzar si el exchange reporto un fallo.

    Returns:
        ResponseCheck exitoso

    Raises:
        ExchangeError: Con el id del exchange y el cuerpo literal
    """
    check = classify_response(body)
    check.raise_for_failure(exchange_id)
    return check
