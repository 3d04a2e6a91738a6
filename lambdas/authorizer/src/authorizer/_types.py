"""Type definitions for authorizer Lambda."""

from typing import TypedDict


class ClientCert(TypedDict, total=False):
    clientCertPem: str
    subjectDN: str
    issuerDN: str
    serialNumber: str


class Identity(TypedDict, total=False):
    """REST API (v1) caller identity, carries the mTLS cert."""

    sourceIp: str
    clientCert: ClientCert


class Authentication(TypedDict, total=False):
    """HTTP API (v2) authentication context, carries the mTLS cert."""

    clientCert: ClientCert


class RequestContext(TypedDict, total=False):
    identity: Identity
    authentication: Authentication
    accountId: str
    apiId: str
    stage: str


class APIGatewayAuthorizerEvent(TypedDict, total=False):
    """API Gateway REQUEST authorizer event (REST v1 or HTTP v2 payload)."""

    type: str
    methodArn: str
    routeArn: str
    resource: str
    path: str
    httpMethod: str
    headers: dict[str, str]
    requestContext: RequestContext


class PermissionRecord(TypedDict):
    """Raw permission entry as stored in the permissions document."""

    api: str
    resource: str
    stage: str
    method: str
    effect: str


class IAMPolicyStatement(TypedDict):
    Action: str
    Effect: str
    Resource: str


class IAMPolicyDocument(TypedDict):
    Version: str
    Statement: list[IAMPolicyStatement]


class AuthorizerPolicyResponse(TypedDict):
    """Lambda authorizer IAM policy response."""

    principalId: str
    policyDocument: IAMPolicyDocument


class LambdaContext:
    """AWS Lambda context object stub for typing."""

    function_name: str
    memory_limit_in_mb: int
    invoked_function_arn: str
    aws_request_id: str
