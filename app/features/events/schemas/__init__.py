"""
Event schemas package.
"""
from app.features.events.schemas.event import DeviceType, InstallationState, ScanEvent, ScanEventIn

__all__ = ["DeviceType", "InstallationState", "ScanEvent", "ScanEventIn"]
