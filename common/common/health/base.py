# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Kubernetes style probes below `/health`.

Services subclass `HealthResponse` with one field per check and `HealthAPIRouter`
to fill those fields in `get_debug_probe` & `get_readiness_probe`.
Dependencies of a check are injected through the signature of the overriding method.
"""

from enum import Enum

from pydantic import BaseModel

from fastapi import APIRouter, status, Response

__all__ = ["HealthStatus", "HealthResponse", "HealthAPIRouter"]


class HealthStatus(Enum):
    healthy = "HEALTHY"
    unhealthy = "UNHEALTHY"


class HealthResponse(BaseModel):
    """
    Every field is a check. A check may be set to a bool,
    `resolve_probe` turns it into a `HealthStatus` before it is returned.
    """

    http_server_connectivity: HealthStatus | bool = HealthStatus.unhealthy

    def convert_from_bool(self) -> None:
        for name, value in iter(self):
            if isinstance(value, bool):
                setattr(self, name, HealthStatus.healthy if value else HealthStatus.unhealthy)

    def is_healthy(self) -> bool:
        return all(value == HealthStatus.healthy for _, value in iter(self))


# path, endpoint method, description, reports the checks of the service
_probes = (
    ("/debug", "get_debug_probe", "Result of every configuration check, for operators.", True),
    ("/liveness", "get_liveness_probe", "Fails only if the instance has to be restarted.", False),
    ("/readiness", "get_readiness_probe", "Fails while the instance can not serve requests.", True),
)


class HealthAPIRouter(APIRouter):
    def __init__(self, response_model: type[HealthResponse] = HealthResponse, **kwargs) -> None:
        super().__init__(prefix="/health", tags=["Health"], **kwargs)
        self.response_model = response_model
        for path, method, description, with_checks in _probes:
            model = response_model if with_checks else HealthResponse
            self.add_api_route(
                path,
                endpoint=getattr(self, method),
                description=description,
                response_model=model,
                responses={code: {"model": model} for code in (status.HTTP_200_OK, status.HTTP_503_SERVICE_UNAVAILABLE)},
            )

    def resolve_probe(self, result: HealthResponse, response: Response) -> HealthResponse:
        """The server answered, so connectivity is healthy. Any other failed check turns the status code into 503."""
        result.http_server_connectivity = HealthStatus.healthy
        result.convert_from_bool()
        response.status_code = status.HTTP_200_OK if result.is_healthy() else status.HTTP_503_SERVICE_UNAVAILABLE
        return result

    def get_debug_probe(self, response: Response) -> HealthResponse:
        return self.resolve_probe(self.response_model(), response)

    def get_liveness_probe(self, response: Response) -> HealthResponse:
        # Checks of the service never require a restart
        return self.resolve_probe(HealthResponse(), response)

    def get_readiness_probe(self, response: Response) -> HealthResponse:
        return self.resolve_probe(self.response_model(), response)
