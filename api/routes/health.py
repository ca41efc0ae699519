from typing import Annotated

from fastapi import APIRouter, Depends

from api.dependencies import get_registry
from api.schemas import HealthResponse
from infrastructure.providers import SourceRegistry

router = APIRouter(prefix='/api/v1', tags=['health'])


@router.get('/health', response_model=HealthResponse, summary='Source and circuit breaker status')
async def health(registry: Annotated[SourceRegistry, Depends(get_registry)]) -> HealthResponse:
	breakers = {
		name: source.transport.breaker.get_status()
		for name, source in registry.items()
		if hasattr(source, 'transport')
	}
	degraded = any(status['state'] != 'CLOSED' for status in breakers.values())
	return HealthResponse(
		status='degraded' if degraded else 'healthy',
		default_source=registry.default_name,
		sources=sorted(registry.list_available()),
		circuit_breakers=breakers,
	)
