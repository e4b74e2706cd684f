"""Bookings app package.

Room bookings: the booking model and its DAO queries, the status
lifecycle (check-in, check-out, cancellation), price calculation and the
availability check that keeps two bookings off the same room and night.
"""
