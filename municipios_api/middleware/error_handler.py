from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import traceback
import logging
import json
from typing import Dict, Any, List, Optional, Union

from municipios_api.middleware.request_id import get_request_id

# Criar um logger específico para o tratamento de erros
logger = logging.getLogger("municipios_api.middleware.error_handler")


class ErrorDetail:
    """Classe para detalhes de erro padronizados."""

    def __init__(
        self,
        status_code: int,
        message: str,
        error_type: str,
        details: Optional[Union[Dict[str, Any], List[Any]]] = None
    ):
        self.status_code = status_code
        self.message = message
        self.error_type = error_type
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        """Converte o erro para um dicionário."""
        error_dict = {
            "status_code": self.status_code,
            "message": self.message,
            "error_type": self.error_type
        }

        if self.details:
            error_dict["details"] = self.details

        request_id = get_request_id()
        if request_id:
            error_dict["request_id"] = request_id

        return error_dict

    def to_response(self) -> JSONResponse:
        return JSONResponse(
            status_code=self.status_code,
            content=jsonable_encoder(self.to_dict())
        )


def format_stack_trace(stack_trace: str) -> str:
    """Formata o stack trace para ser mais legível no log."""
    lines = stack_trace.split('\n')
    formatted_lines = []
    for line in lines:
        if line.strip():
            formatted_lines.append(f"  │ {line}")

    return "\n".join(formatted_lines)


def _log_with_trace(message: str, exc: BaseException) -> None:
    stack_trace = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    logger.error(
        f"{message}\n╭─ Stack Trace ─────────────────────────╮\n"
        f"{format_stack_trace(stack_trace)}\n╰───────────────────────────────────────╯"
    )


def setup_error_handlers(app: FastAPI) -> None:
    """
    Configura o tratamento de erros para a aplicação FastAPI.
    """
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handler para exceções HTTP."""
        if exc.status_code >= 500:
            _log_with_trace(
                f"❌ HTTP: {request.method} {request.url.path} - {exc.status_code} - {exc.detail}",
                exc,
            )
        else:
            logger.warning(f"⚠️ HTTP: {request.method} {request.url.path} - {exc.status_code} - {exc.detail}")

        return ErrorDetail(
            status_code=exc.status_code,
            message=str(exc.detail),
            error_type="http_exception"
        ).to_response()

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """
        Handler para erros de validação.

        Responde 400 para manter o contrato do cliente em três níveis
        (dados, sem dados, erro do cliente).
        """
        validation_errors = jsonable_encoder(exc.errors())
        error_details_str = json.dumps(validation_errors, indent=2, ensure_ascii=False)
        logger.warning(
            f"⚠️ VALID: Erro de validação em {request.method} {request.url.path}\n"
            f"╭─ Erros de Validação ─────────────────╮\n  │ {error_details_str}\n"
            f"╰───────────────────────────────────────╯"
        )

        return ErrorDetail(
            status_code=status.HTTP_400_BAD_REQUEST,
            message="Erro de validação nos dados da requisição",
            error_type="validation_error",
            details=validation_errors
        ).to_response()

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        """Handler para exceções genéricas não tratadas."""
        error_type = exc.__class__.__name__
        _log_with_trace(f"❌ EXC: {request.method} {request.url.path} - {error_type}: {exc}", exc)

        return ErrorDetail(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message=str(exc),
            error_type=error_type
        ).to_response()
