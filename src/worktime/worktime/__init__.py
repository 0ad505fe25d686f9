"""worktime package.

Effective-work-hours engine for attendance records: break shrinkage,
present/half-day/absent classification and geofence-driven auto checkout,
with a thin Flask controller layer over service/repository layers.
"""
