"""API views for staff accounts."""

from __future__ import annotations

from rest_framework import generics  # type: ignore

from .permissions import IsHotelStaff
from .serializers import StaffSerializer


class CurrentStaffView(generics.RetrieveUpdateAPIView):
    """Read or edit the profile of the logged in member of staff."""

    serializer_class = StaffSerializer
    permission_classes = [IsHotelStaff]

    def get_object(self):  # type: ignore
        return self.request.user
