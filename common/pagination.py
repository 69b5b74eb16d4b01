"""
Pagination utilities for the project.

The audit endpoints (cron logs, webhook logs) page with ``limit`` and
``offset`` query parameters and echo both back alongside the total so
the admin UI can render its pager without extra requests.
"""
from collections import OrderedDict

from rest_framework.pagination import LimitOffsetPagination
from rest_framework.response import Response


class AuditLogPagination(LimitOffsetPagination):
    """Limit/offset paginator with a default page of 50 rows."""

    default_limit = 50
    max_limit = 500

    def get_paginated_response(self, data):
        return Response(
            OrderedDict(
                [
                    ("results", data),
                    ("total", self.count),
                    ("limit", self.limit),
                    ("offset", self.offset),
                ]
            )
        )

    def get_paginated_response_schema(self, schema):
        return {
            "type": "object",
            "properties": {
                "results": schema,
                "total": {"type": "integer"},
                "limit": {"type": "integer"},
                "offset": {"type": "integer"},
            },
        }
