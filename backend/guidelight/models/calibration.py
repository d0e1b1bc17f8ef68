"""
Modèles de calibration : mesures de balises et verdict de confiance
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Optional, Tuple

from .position import Vec3


class CalibrationQuality(Enum):
    EXCELLENT = 'excellent'
    GOOD = 'good'
    FAIR = 'fair'
    POOR = 'poor'

    @property
    def color(self) -> Tuple[float, float, float]:
        return {
            CalibrationQuality.EXCELLENT: (0.0, 1.0, 0.0),
            CalibrationQuality.GOOD: (0.5, 1.0, 0.0),
            CalibrationQuality.FAIR: (1.0, 0.8, 0.0),
            CalibrationQuality.POOR: (1.0, 0.0, 0.0),
        }[self]


@dataclass(frozen=True)
class BeaconMeasurement:
    """Observation d'une balise pendant la calibration"""
    beacon_id: str
    map_position: Vec3
    observed_direction: Vec3
    distance: float
    confidence: float  # 0-1

    @classmethod
    def from_dict(cls, data: Dict) -> 'BeaconMeasurement':
        return cls(
            beacon_id=str(data['beaconId']),
            map_position=Vec3(
                float(data.get('mapPositionX', 0.0)),
                float(data.get('mapPositionY', 0.0)),
                float(data.get('mapPositionZ', 0.0)),
            ),
            observed_direction=Vec3(
                float(data.get('observedDirectionX', 0.0)),
                float(data.get('observedDirectionY', 0.0)),
                float(data.get('observedDirectionZ', 0.0)),
            ),
            distance=float(data.get('distance', 0.0)),
            confidence=float(data['confidence']),
        )


@dataclass(frozen=True)
class CalibrationData:
    """
    Verdict d'une session de calibration

    residual_error mesure la cohérence des confiances (écart-type × 100),
    ce n'est pas une erreur angulaire ni une borne sur l'erreur de position.
    L'égalité ne porte que sur l'horodatage, la position et le cap.
    """
    user_position: Tuple[float, float]  # (X, Z) sur le plan
    heading: float
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    measurements: Tuple[BeaconMeasurement, ...] = field(default=(), compare=False)
    confidence: float = field(default=0.0, compare=False)
    quality_rating: CalibrationQuality = field(default=CalibrationQuality.POOR, compare=False)
    residual_error: float = field(default=999.0, compare=False)
    consistency_score: float = field(default=0.0, compare=False)

    @property
    def is_trusted(self) -> bool:
        return self.quality_rating is not CalibrationQuality.POOR

    def to_dict(self) -> Dict:
        return {
            'userPosition': {'x': self.user_position[0], 'z': self.user_position[1]},
            'heading': self.heading,
            'confidence': self.confidence,
            'qualityRating': self.quality_rating.value,
            'residualError': self.residual_error,
            'consistencyScore': self.consistency_score,
            'measurementCount': len(self.measurements),
            'timestamp': self.timestamp.isoformat(),
        }


class CalibrationStep(Enum):
    WAITING_FOR_AR = 'waiting_for_ar'
    READY = 'ready'
    MEASURING_BEACON = 'measuring_beacon'
    COMPLETED = 'completed'
    FAILED = 'failed'


@dataclass(frozen=True)
class CalibrationState:
    """État de l'écran de calibration"""
    step: CalibrationStep
    index: int = 0
    total: int = 0
    data: Optional[CalibrationData] = None
    message: Optional[str] = None

    @classmethod
    def measuring(cls, index: int, total: int) -> 'CalibrationState':
        return cls(CalibrationStep.MEASURING_BEACON, index=index, total=total)

    @classmethod
    def completed(cls, data: CalibrationData) -> 'CalibrationState':
        return cls(CalibrationStep.COMPLETED, data=data)

    @classmethod
    def failed(cls, message: str) -> 'CalibrationState':
        return cls(CalibrationStep.FAILED, message=message)

    @property
    def display_message(self) -> str:
        if self.step is CalibrationStep.WAITING_FOR_AR:
            return "Initializing AR tracking..."
        if self.step is CalibrationStep.READY:
            return "Ready to calibrate"
        if self.step is CalibrationStep.MEASURING_BEACON:
            return f"Point camera at beacon {self.index + 1} of {self.total}"
        if self.step is CalibrationStep.COMPLETED:
            return "Calibration complete!"
        return f"Failed: {self.message}"
