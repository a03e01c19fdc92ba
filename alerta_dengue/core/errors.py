"""
Erros de domínio da aplicação.

Todos herdam de AppError e carregam o código HTTP e uma mensagem que pode ser
exibida ao usuário final. Os handlers registrados em main.py convertem esses
erros em respostas JSON no formato {"detail": ...}.
"""

from typing import Any, Dict, List, Optional


class AppError(Exception):
    """Erro base, recuperável e exibível ao usuário."""

    status_code: int = 500
    detail: str = "Erro interno do servidor"
    headers: Optional[Dict[str, str]] = None

    def __init__(self, detail: Optional[str] = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)

    def to_dict(self) -> Dict[str, Any]:
        return {"detail": self.detail}


class ValidationError(AppError):
    """Entrada ausente ou malformada. Carrega a lista de falhas por campo."""

    status_code = 400
    detail = "Dados inválidos"

    def __init__(self, errors: List[Dict[str, str]], detail: Optional[str] = None):
        super().__init__(detail)
        self.errors = errors

    @property
    def fields(self) -> List[str]:
        return [error["field"] for error in self.errors]

    def to_dict(self) -> Dict[str, Any]:
        return {"detail": self.detail, "errors": self.errors}


class DuplicateIdentity(AppError):
    status_code = 400
    detail = "Usuário ou email já registrado"


class InvalidCredentials(AppError):
    status_code = 401
    detail = "Usuário ou senha incorretos"


class Unauthorized(AppError):
    status_code = 401
    detail = "Não autenticado"
    headers = {"WWW-Authenticate": "Bearer"}


class Forbidden(AppError):
    status_code = 403
    detail = "Você só pode alterar suas próprias denúncias"


class NotFound(AppError):
    status_code = 404
    detail = "Recurso não encontrado"


class InvalidStatus(AppError):
    status_code = 400
    detail = "Status inválido"


class AddressNotFound(AppError):
    status_code = 404
    detail = "Endereço não encontrado. Tente ser mais específico ou marque o local diretamente no mapa."


class LookupFailed(AppError):
    status_code = 502
    detail = "Falha ao consultar o serviço de geocodificação. Tente novamente ou marque o local no mapa."
