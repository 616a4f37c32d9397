import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.error_logger import get_error_reporter, is_error_reporting_configured
from domain.errors import RelayError, UpstreamStreamInterruptedError
from presentation.schemas.media import ErrorResponse

logger = logging.getLogger("relay.errors")


def _error(status_code: int, message: str) -> JSONResponse:
	return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
	logger.debug("%s %s -> %s (%s)", request.method, request.url.path, exc.status_code, exc.message)
	return _error(exc.status_code, exc.message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
	return _error(exc.status_code, str(exc.detail))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
	logger.info("Невалидный запрос %s: %s", request.url.path, exc.errors())
	return _error(400, "Invalid request parameters.")


def _stream_interrupted(exc: BaseException) -> bool:
	# обрыв тела уже записан в отчет потоком, Starlette оборачивает его в RuntimeError
	while exc is not None:
		if isinstance(exc, UpstreamStreamInterruptedError):
			return True
		exc = exc.__cause__ or exc.__context__
	return False


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
	if _stream_interrupted(exc):
		logger.warning("Stream aborted mid-body for %s", request.url.path)
		return _error(502, UpstreamStreamInterruptedError.default_message)
	logger.exception("Error in %s endpoint", request.url.path)
	if is_error_reporting_configured():
		get_error_reporter().log_error(
			error=exc,
			context={"method": request.method, "path": request.url.path},
			message="Unhandled error",
		)
	return _error(500, "Internal Server Error")


def register_error_handlers(app: FastAPI) -> None:
	app.add_exception_handler(RelayError, relay_error_handler)
	app.add_exception_handler(StarletteHTTPException, http_exception_handler)
	app.add_exception_handler(RequestValidationError, validation_error_handler)
	app.add_exception_handler(Exception, unhandled_error_handler)
