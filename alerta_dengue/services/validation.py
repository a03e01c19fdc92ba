from typing import Dict, List

from pydantic import ValidationError as PydanticValidationError

from alerta_dengue.core.errors import ValidationError


def field_errors(errors: List[dict]) -> List[Dict[str, str]]:
    """
    Converte a lista de erros do pydantic em {field, message}.
    Erros de "body" / "path" perdem o prefixo de localização.
    """
    result = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "path", "query")]
        result.append({
            "field": ".".join(loc) or "__root__",
            "message": error.get("msg", "Valor inválido"),
        })
    return result


def validation_error_from(exc: PydanticValidationError) -> ValidationError:
    return ValidationError(field_errors(exc.errors()))
