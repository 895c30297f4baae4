"""Admin view over the audit log."""

from __future__ import annotations

from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.accounts.models import Role
from modules.accounts.permissions import role_required
from modules.audit.serializers import LogEntrySerializer
from modules.audit.services import AuditLog
from modules.core.responses import envelope


class LogEntryPagination(PageNumberPagination):
    page_size_query_param = "page_size"
    max_page_size = 500


class LogEntryListView(APIView):
    """GET /api/v1/admin/logs[?page=N&page_size=M]"""

    permission_classes = [IsAuthenticated, role_required(Role.ADMIN)]

    def get(self, request: Request) -> Response:
        paginator = LogEntryPagination()
        page = paginator.paginate_queryset(AuditLog().entries(), request, view=self)
        return envelope(
            "System logs fetched successfully.",
            {
                "count": paginator.page.paginator.count,
                "next": paginator.get_next_link(),
                "previous": paginator.get_previous_link(),
                "results": LogEntrySerializer(page, many=True).data,
            },
        )
