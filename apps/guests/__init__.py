"""Guests app package.

Guest records (contact details, nationality, loyalty points) and the
queries the front desk runs against them.
"""
