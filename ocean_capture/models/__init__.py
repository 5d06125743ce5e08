"""Domain models for the capture pipeline."""

from ocean_capture.models.imagery import (
    AcquisitionDescriptor,
    AcquisitionMode,
    Credential,
    ImageRequest,
    ModelValidationError,
    ProviderConfig,
    SensorFamily,
    SpatialWindow,
    TemporalWindow,
)

__all__ = [
    "AcquisitionDescriptor",
    "AcquisitionMode",
    "Credential",
    "ImageRequest",
    "ModelValidationError",
    "ProviderConfig",
    "SensorFamily",
    "SpatialWindow",
    "TemporalWindow",
]
