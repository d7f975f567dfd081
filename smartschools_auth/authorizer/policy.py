"""
Authorizer Policy
=================
IAM policy documents returned to API Gateway by a TOKEN authorizer.
"""

from typing import Any, Dict, Optional

from .models import AuthResult

ANONYMOUS_PRINCIPAL = "anonymous"


def stage_wildcard_arn(method_arn: str) -> str:
    """
    Widen a method ARN to every method and path of its stage.

    ``arn:aws:execute-api:region:acct:apiId/stage/GET/schools`` becomes
    ``arn:aws:execute-api:region:acct:apiId/stage/*``. API Gateway caches the
    authorizer result per token across every route of the stage.
    """
    prefix, sep, path = method_arn.partition(":execute-api:")
    if not sep:
        return method_arn
    parts = path.split("/")
    if len(parts) < 2:
        return method_arn
    return f"{prefix}{sep}{parts[0]}/{parts[1]}/*"


def build_policy(result: AuthResult, method_arn: Optional[str]) -> Dict[str, Any]:
    """
    Build the authorizer response for API Gateway.

    Allow responses carry the identity in ``context`` for downstream
    integrations; deny responses scope the statement to the called method.
    """
    resource = method_arn or "*"
    if result.allowed:
        resource = stage_wildcard_arn(resource)

    response: Dict[str, Any] = {
        "principalId": result.identity or ANONYMOUS_PRINCIPAL,
        "policyDocument": {
            "Version": "2012-10-17",
            "Statement": [
                {
                    "Action": "execute-api:Invoke",
                    "Effect": result.decision.value,
                    "Resource": resource,
                }
            ],
        },
    }

    if result.allowed:
        # Context values must be strings, numbers or booleans
        response["context"] = {
            "email": result.identity,
            "expiresAt": result.expires_at,
        }
    return response
