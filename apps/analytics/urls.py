"""URL routing for administrator reporting endpoints."""

from django.urls import path  # type: ignore

from .views import DashboardStatsView, ExportView, RevenueReportView, SystemLogsView


urlpatterns = [
    # Mounted under 'admin/' in config.urls
    path('dashboard/stats/', DashboardStatsView.as_view(), name='admin-dashboard-stats'),
    path('reports/revenue/', RevenueReportView.as_view(), name='admin-revenue-report'),
    path('system/logs/', SystemLogsView.as_view(), name='admin-system-logs'),
    path('export/', ExportView.as_view(), name='admin-export'),
]
