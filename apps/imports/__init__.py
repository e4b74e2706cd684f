"""Imports app package.

Bulk loading of rooms, guests and bookings from Excel workbooks, through
a management command and a manager-only upload endpoint.
"""
