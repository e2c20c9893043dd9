"""
Gestionnaires d'exceptions.
- Erreurs du proxy de paiement -> JSON {error, details} avec le code porté par l'exception.
- HTTPException -> JSON FastAPI standard {"detail": ...}.
"""
import logging
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from storefront.payments.errors import PaymentError

logger = logging.getLogger(__name__)

def register_exception_handlers(app: FastAPI) -> None:
    """
    Enregistre les handlers PaymentError et HTTPException.
    - Le navigateur affiche le message `error` dans le panneau d'erreur du checkout.
    """
    @app.exception_handler(PaymentError)
    async def payment_error_handler(request: Request, exc: PaymentError):
        logger.info("payments.error path=%s status=%s type=%s", request.url.path, exc.status_code, type(exc).__name__)
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=getattr(exc, "headers", None))
