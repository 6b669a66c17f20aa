from django.urls import path
from .views.report_views import (
    generate_flow_report, test_openai
)

app_name = "admin_app"

urlpatterns = [
    path("api/generate-flow-report", generate_flow_report, name="generate-flow-report"),
    path("api/test-openai", test_openai, name="test-openai"),
]
