"""Upload endpoint for Excel imports."""

from __future__ import annotations

from rest_framework import status  # type: ignore
from rest_framework.parsers import FormParser, MultiPartParser  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.users.permissions import IsManager

from .excel import ImportFailedError
from .serializers import WorkbookUploadSerializer
from .services import import_bookings, import_guests, import_rooms

IMPORTERS = {
    "rooms": import_rooms,
    "guests": import_guests,
    "bookings": import_bookings,
}


class WorkbookImportView(APIView):
    """Import rooms, guests or bookings from an uploaded workbook (managers only)."""

    permission_classes = [IsManager]
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request, kind: str, format=None):  # type: ignore
        upload = WorkbookUploadSerializer(data=request.data)
        upload.is_valid(raise_exception=True)
        try:
            report = IMPORTERS[kind](upload.validated_data["file"])
        except ImportFailedError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(report.as_dict(), status=status.HTTP_200_OK)
