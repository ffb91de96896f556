from .distance import (
    Coordinates,
    LocationInput,
    DistanceQuery,
    DistanceStatus,
    DistanceMatrixResult,
    DistanceDisplay,
)
