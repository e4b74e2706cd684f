"""
Shared Kernel

Value objects, base exceptions and infrastructure helpers shared by the
guest, room and booking apps.
"""
