"""Users app package.

Staff accounts (receptionists, managers, administrators) that log into
the back office, plus the permission classes shared by the other apps.
"""
