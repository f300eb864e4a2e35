import structlog
from django.db import DatabaseError, connections
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from apps.bookings.application.command_handlers import booking_settings

logger = structlog.get_logger(__name__)


@csrf_exempt
@require_http_methods(["GET"])
def healthz(request):
    """Health check endpoint for load balancers and containers"""
    alias = booking_settings()["DATABASE_ALIAS"]
    try:
        with connections[alias].cursor() as cursor:
            cursor.execute("SELECT 1")
    except DatabaseError as exc:
        # Driver text goes to the log only
        logger.error("healthz.fail", database=alias, error=str(exc), exc_info=True)
        return JsonResponse({"status": "unhealthy", "database": "unavailable"}, status=503)
    logger.info("healthz.ok", database=alias)
    return JsonResponse({"status": "healthy", "database": "connected"}, status=200)
