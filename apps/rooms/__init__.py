"""Rooms app package.

Room inventory: type, nightly rate, capacity, amenities and the
housekeeping status, plus the availability queries used when booking.
"""
