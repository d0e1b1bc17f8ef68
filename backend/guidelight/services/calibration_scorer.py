"""
Service de notation de calibration

Confiance agrégée = moyenne des confiances × score de cohérence (écart-type).
Heuristique de confiance uniquement : aucune triangulation géométrique ici.
"""

import logging
import math
from typing import Sequence, Tuple

import numpy as np

from ..config import CONFIG
from ..models import BeaconMeasurement, CalibrationData, CalibrationQuality

logger = logging.getLogger(__name__)


def consistency_score_for(std_dev: float, settings: dict = None) -> float:
    settings = settings or CONFIG.CALIBRATION_SETTINGS
    for threshold, score in settings['consistency_thresholds']:
        if std_dev < threshold:
            return score
    return settings['consistency_floor']


def quality_for(confidence: float, residual_error: float, settings: dict = None) -> CalibrationQuality:
    settings = settings or CONFIG.CALIBRATION_SETTINGS
    for name, min_confidence, max_residual in settings['quality_thresholds']:
        if confidence > min_confidence and residual_error < max_residual:
            return CalibrationQuality(name)
    return CalibrationQuality.POOR


def score_calibration(
    measurements: Sequence[BeaconMeasurement],
    user_position: Tuple[float, float] = (0.0, 0.0),
    heading: float = 0.0,
    settings: dict = None
) -> CalibrationData:
    """
    Calcule le verdict de calibration (ne lève jamais d'exception)

    Liste vide ou confiances non finies → confiance 0, qualité 'poor',
    erreur résiduelle 999.
    """
    settings = settings or CONFIG.CALIBRATION_SETTINGS
    measurements = tuple(measurements)
    heading = heading if math.isfinite(heading) else 0.0
    confidences = np.array([m.confidence for m in measurements], dtype=float)

    if confidences.size == 0 or not np.all(np.isfinite(confidences)):
        if confidences.size:
            logger.warning("⚠️  Calibration: confiances non finies, verdict 'poor'")
        return CalibrationData(
            user_position=user_position,
            heading=heading,
            measurements=measurements,
            confidence=0.0,
            quality_rating=CalibrationQuality.POOR,
            residual_error=settings['empty_residual_error'],
            consistency_score=0.0,
        )

    # Tri préalable : somme flottante identique quel que soit l'ordre des mesures
    confidences = np.sort(confidences)
    if confidences[0] == confidences[-1]:
        avg_confidence, std_dev = float(confidences[0]), 0.0
    else:
        avg_confidence = float(np.mean(confidences))
        std_dev = float(np.sqrt(np.mean((confidences - avg_confidence) ** 2)))
    consistency = consistency_score_for(std_dev, settings)

    confidence = avg_confidence * consistency
    residual_error = std_dev * settings['residual_scale']
    quality = quality_for(confidence, residual_error, settings)

    logger.info(
        f"📊 Calibration: moyenne {avg_confidence * 100:.1f}%, écart-type {std_dev:.3f}, "
        f"cohérence {consistency * 100:.0f}%, confiance {confidence * 100:.1f}%, "
        f"qualité {quality.value}"
    )

    return CalibrationData(
        user_position=user_position,
        heading=heading,
        measurements=measurements,
        confidence=confidence,
        quality_rating=quality,
        residual_error=residual_error,
        consistency_score=consistency,
    )
