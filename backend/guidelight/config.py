"""
Configuration centralisée pour GuideLight
Tous les paramètres de navigation configurables en un seul endroit
"""

import logging


class NavigationConfig:
    """Configuration centralisée pour le moteur de navigation GuideLight"""

    # CALCUL D'ITINÉRAIRE
    PATHFINDING_SETTINGS = {
        'walking_speed': 1.2,            # m/s, vitesse de marche normale
        'max_iterations': 100,           # Budget d'itérations A*
        'heuristic_fallback': 10.0,      # Distance si une salle n'a aucune balise
        'direct_path_max_distance': 2.0, # Distance max d'un waypoint au segment (m)
        'max_detour_ratio': 1.1,         # Détour max accepté (10%)
        'min_connected_beacons': 2,      # Waypoint "entre" au moins deux balises
        'min_segment_length': 1e-6,      # Segments plus courts ignorés
    }

    # CALIBRATION
    CALIBRATION_SETTINGS = {
        'empty_residual_error': 999.0,
        # (écart-type max, score de cohérence)
        'consistency_thresholds': [(0.1, 1.0), (0.2, 0.85), (0.3, 0.7)],
        'consistency_floor': 0.5,
        # (qualité, confiance min exclusive, erreur résiduelle max exclusive)
        'quality_thresholds': [
            ('excellent', 0.85, 10.0),
            ('good', 0.70, 15.0),
            ('fair', 0.55, 25.0),
        ],
        'residual_scale': 100.0,
    }

    # SUIVI DE PROGRESSION
    PROGRESS_SETTINGS = {
        'arrival_threshold': 0.5,        # m
        'off_route_threshold': 2.0,      # m
        'approach_min_distance': 1.0,    # m
        'approach_max_distance': 2.5,    # m
        'step_length': 0.70,             # m par pas
        'min_step_length': 0.3,
        'aligned_degrees': 15.0,
    }

    # API HTTP
    API_SETTINGS = {
        'host': '0.0.0.0',
        'port': 5002,
        'url_prefix': '/api/navigation',
    }

    # MONITORING
    MONITORING_SETTINGS = {
        'log_level': 'INFO',
        'log_format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
    }

    @classmethod
    def walking_speed(cls) -> float:
        return cls.PATHFINDING_SETTINGS['walking_speed']

    @classmethod
    def setup_logging(cls, level: str = None):
        """Configure le logger racine selon MONITORING_SETTINGS"""
        level_name = (level or cls.MONITORING_SETTINGS['log_level']).upper()
        logging.basicConfig(
            level=getattr(logging, level_name, logging.INFO),
            format=cls.MONITORING_SETTINGS['log_format'],
        )
        logging.getLogger(__name__).info(f"✅ Logging configuré ({level_name})")


# Raccourci pour accès rapide
CONFIG = NavigationConfig
