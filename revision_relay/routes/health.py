"""
Revision Relay — Health Check Route
====================================

What:  Health check endpoint for monitoring and container probes.
How:   Asks the generation provider for a lightweight reachability check
       (model listing, no tokens) and reports the configured bucket.
Who:   Called by Docker health checks, load balancers and monitoring.

Status levels:
    - healthy:   Generation provider reachable
    - degraded:  Generation provider unreachable (requests will fail with 500)
The endpoint always answers 200; the storage bucket is not probed.
"""

import logging
import time

from fastapi import APIRouter, Depends

from revision_relay import __version__
from revision_relay.dependencies import RelayContainer, get_container
from revision_relay.schemas.relay import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description=(
        "Returns the health status of the relay and its generation provider. "
        "Used by container health checks and load balancers."
    ),
)
async def health_check(
    container: RelayContainer = Depends(get_container),
) -> HealthResponse:
    generation_status = "available"
    overall = "healthy"

    if not await container.generation_provider.health_check():
        generation_status = "unavailable"
        overall = "degraded"
        logger.warning("Health check: generation provider unreachable")

    return HealthResponse(
        status=overall,
        version=__version__,
        generation=generation_status,
        storage_bucket=container.upload_relay.storage.bucket,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
