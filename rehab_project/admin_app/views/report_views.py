import json
import logging
import traceback

from django.conf import settings
from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from admin_app.services.openai_service import OpenAIService

logger = logging.getLogger(__name__)


# ============================================================
# GENERATE SYSTEM FLOW REPORT (ADMIN DASHBOARD)
# ============================================================
@csrf_exempt
@require_POST
def generate_flow_report(request):
    """
    JSON endpoint: {"systemData": {...}} -> AI analysis report.
    """
    logger.info("Generating system flow report...")

    try:
        body = json.loads(request.body or b"{}")
    except ValueError:
        body = {}

    system_data = body.get("systemData") if isinstance(body, dict) else None

    if not system_data or not isinstance(system_data, dict):
        logger.error("No system data provided")
        return JsonResponse(
            {"error": "System data is required"},
            status=400
        )

    logger.info(
        "System data received: statistics=%s analytics=%s",
        bool(system_data.get("statistics")),
        bool(system_data.get("analytics")),
    )

    try:
        report = OpenAIService().generate_system_flow_report(system_data)
    except Exception as exc:
        logger.exception("Error generating flow report")
        return JsonResponse(
            {
                "error": str(exc) or "Failed to generate system flow report",
                "details": traceback.format_exc() if settings.DEBUG else None,
            },
            status=500
        )

    logger.info("System flow report generated successfully")

    return JsonResponse(
        {
            "success": True,
            "report": report,
            "timestamp": timezone.now().isoformat(),
        },
        status=200
    )


# ============================================================
# TEST OPENAI CONNECTION
# ============================================================
@require_GET
def test_openai(request):
    logger.info("Testing OpenAI connection...")

    result = OpenAIService().test_connection()

    if not result["success"]:
        return JsonResponse(
            {
                "success": False,
                "error": result["error"],
            },
            status=500
        )

    return JsonResponse(
        {
            "success": True,
            "message": "OpenAI connection successful",
            "timestamp": timezone.now().isoformat(),
        },
        status=200
    )
