"""API views for administrator reporting.

Dashboard statistics, revenue report, recent activity and data export.
"""

from __future__ import annotations

import logging

from django.http import HttpResponse  # type: ignore
from django.utils import timezone  # type: ignore
from rest_framework.permissions import IsAuthenticated  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.courses.views import parse_query_date
from apps.users.api.permissions import CanExportData, CanViewReports
from shared.domain.exceptions import ValidationFailed

from . import services

logger = logging.getLogger(__name__)


class DashboardStatsView(APIView):
    """GET /api/v1/admin/dashboard/stats/"""

    permission_classes = [IsAuthenticated, CanViewReports]

    def get(self, request, format=None):  # type: ignore
        return Response(services.dashboard_stats())


class RevenueReportView(APIView):
    """GET /api/v1/admin/reports/revenue/?start_date=YYYY-MM-DD&end_date=YYYY-MM-DD"""

    permission_classes = [IsAuthenticated, CanViewReports]

    def get(self, request, format=None):  # type: ignore
        start_date = parse_query_date(request.query_params.get("start_date"), "start_date")
        end_date = parse_query_date(request.query_params.get("end_date"), "end_date")
        return Response(services.revenue_report(start_date, end_date))


class SystemLogsView(APIView):
    """GET /api/v1/admin/system/logs/"""

    permission_classes = [IsAuthenticated, CanViewReports]

    def get(self, request, format=None):  # type: ignore
        return Response(services.system_logs())


class ExportView(APIView):
    """GET /api/v1/admin/export/?type=users|bookings|courses[&file_format=csv]"""

    permission_classes = [IsAuthenticated, CanExportData]

    def get(self, request, format=None):  # type: ignore
        export_type = request.query_params.get("type", "")
        file_format = request.query_params.get("file_format", "json")
        if file_format not in ("json", "csv"):
            raise ValidationFailed(
                "Недопустимый формат экспорта.",
                details={"file_format": file_format, "allowed": ["json", "csv"]},
            )

        rows = services.export_rows(export_type)
        logger.info(f"Export of {export_type} ({len(rows)} rows, {file_format}) by user {request.user.pk}")

        if file_format == "csv":
            response = HttpResponse(services.rows_to_csv(rows), content_type="text/csv; charset=utf-8")
            filename = f"{export_type}_{timezone.localdate():%Y%m%d}.csv"
            response["Content-Disposition"] = f'attachment; filename="{filename}"'
            return response

        return Response(
            {
                "export_type": export_type,
                "data": rows,
                "count": len(rows),
                "exported_at": timezone.now().isoformat(),
            }
        )
