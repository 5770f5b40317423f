"""
Tracker exceptions.
"""


class TrackerError(Exception):
    """Base class for tracker errors. The message is user-facing."""
    pass


class MissingVehicleError(TrackerError):
    def __init__(self, message: str = "Falta el ID del vehículo."):
        super().__init__(message)


class RecordNotFoundError(TrackerError):
    pass


class BackupFormatError(TrackerError):
    pass
