"""
Local Development App
=====================

Serves the Lambda handlers over HTTP for local development.

Usage:
    OTP_STORE_BACKEND=memory EMAIL_BACKEND=log SECRET_BACKEND=env \\
    JWT_SECRET=dev-only-signing-key-change-me-000000 \\
        uvicorn smartschools_auth.local_app:app --reload

Each route synthesises an API Gateway proxy event and delegates to the same
handler functions the Lambdas use.
"""

import json
import time
from typing import Any, Callable, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from smartschools_auth import __version__
from smartschools_auth.authorizer import TokenAuthorizer
from smartschools_auth.issuer import OTPIssuer
from smartschools_auth.verifier import OTPVerifier

from .handlers import dependencies
from .handlers.request_otp import handle_request_otp
from .handlers.verify_otp import handle_verify_otp


def _proxy_event(request: Request, body: bytes) -> Dict[str, Any]:
    return {
        "httpMethod": request.method,
        "path": request.url.path,
        "headers": dict(request.headers),
        "body": body.decode("utf-8") if body else None,
        "isBase64Encoded": False,
    }


def _to_response(proxy_response: Dict[str, Any]) -> JSONResponse:
    headers = {
        k: v for k, v in proxy_response.get("headers", {}).items()
        if k.lower() != "content-type"
    }
    return JSONResponse(
        status_code=proxy_response["statusCode"],
        content=json.loads(proxy_response["body"]),
        headers=headers,
    )


def create_app(
    issuer: Optional[OTPIssuer] = None,
    verifier: Optional[OTPVerifier] = None,
    authorizer: Optional[TokenAuthorizer] = None,
    cors_origin: Optional[str] = None,
) -> FastAPI:
    """
    Create the local app.

    Collaborators not passed in are built from the environment on first use.
    """
    app = FastAPI(title="SmartSchools Auth (local)", version=__version__)

    get_issuer: Callable[[], OTPIssuer] = (lambda: issuer) if issuer else dependencies.get_issuer
    get_verifier: Callable[[], OTPVerifier] = (lambda: verifier) if verifier else dependencies.get_verifier
    get_authorizer: Callable[[], TokenAuthorizer] = (
        (lambda: authorizer) if authorizer else dependencies.get_authorizer
    )

    def origin() -> str:
        if cors_origin is not None:
            return cors_origin
        return dependencies.get_config().cors_allow_origin

    @app.post("/auth/request-otp")
    async def request_otp(request: Request):
        event = _proxy_event(request, await request.body())
        # bcrypt and the AWS clients block; keep them off the event loop
        response = await run_in_threadpool(handle_request_otp, event, get_issuer(), origin())
        return _to_response(response)

    @app.post("/auth/verify-otp")
    async def verify_otp(request: Request):
        event = _proxy_event(request, await request.body())
        response = await run_in_threadpool(handle_verify_otp, event, get_verifier(), origin())
        return _to_response(response)

    @app.get("/auth/me")
    async def me(request: Request):
        header = request.headers.get("authorization")
        if not header:
            return JSONResponse(status_code=401, content={"message": "Unauthorized"})

        result = get_authorizer().authorize(header)
        if not result.allowed:
            return JSONResponse(
                status_code=403,
                content={"message": "User is not authorized to access this resource"},
            )
        return {"email": result.identity, "expiresAt": result.expires_at}

    @app.get("/health")
    async def health():
        return {"status": "healthy", "version": __version__, "timestamp": time.time()}

    return app


app = create_app()
