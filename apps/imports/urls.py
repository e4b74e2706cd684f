"""URL routing for workbook imports."""

from django.urls import re_path  # type: ignore

from .views import WorkbookImportView


urlpatterns = [
    re_path(r"^(?P<kind>rooms|guests|bookings)/$", WorkbookImportView.as_view(), name="import-workbook"),
]
