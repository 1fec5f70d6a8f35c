"""Report endpoints behind My Performance and the class report lists."""

from __future__ import annotations

from typing import Any

from school_client.domains.performance import performance_view
from school_client.services.base import BaseService, as_list
from school_client.utils.logger import get_logger

logger = get_logger(__name__)


class ReportService(BaseService):
    def class_performance(self) -> dict[str, Any]:
        """GET /reports/student-class-performance -> {students, marks, currentUserClass}."""
        data = self._api.get(
            "/reports/student-class-performance", error_message="Could not load class performance."
        )
        return data if isinstance(data, dict) else {}

    def my_report_card(self) -> dict[str, Any]:
        data = self._api.get("/reports/my-report-card", error_message="Could not load report card.")
        return data if isinstance(data, dict) else {}

    def load_performance(self) -> tuple[dict[str, Any], dict[str, Any]]:
        """Both payloads My Performance needs: (class_data, studentInfo)."""
        class_data = self.class_performance()
        my_info = self.my_report_card().get("studentInfo") or {}
        logger.debug("Loaded performance for %s students", len(class_data.get("students") or []))
        return class_data, my_info

    def my_performance(self, exam: str, subject: str) -> dict[str, Any] | None:
        class_data, my_info = self.load_performance()
        return performance_view(class_data, my_info, exam, subject)

    def classes(self) -> list[Any]:
        return as_list(self._api.get("/reports/classes", error_message="Could not load classes."))

    def students(self, class_group: str) -> list[dict[str, Any]]:
        return as_list(self._api.get(f"/reports/students/{class_group}", error_message="Could not load students."))

    def class_data(self, class_group: str) -> dict[str, Any]:
        data = self._api.get(f"/reports/class-data/{class_group}", error_message="Could not load class report.")
        return data if isinstance(data, dict) else {}
