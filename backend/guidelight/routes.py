"""
Routes API pour la navigation GuideLight
Endpoints de calcul d'itinéraire, de calibration et de suivi de progression
"""

from flask import Blueprint, request, jsonify
import logging

from .config import CONFIG
from .errors import GuideLightError
from .models import BeaconMeasurement, IndoorMap, Vec3
from .services import ProgressTracker, PathPlanner, export_path, load_exported_path, score_calibration

logger = logging.getLogger(__name__)

# Blueprint pour les routes de navigation
navigation_bp = Blueprint('navigation', __name__, url_prefix=CONFIG.API_SETTINGS['url_prefix'])


def _bad_request(message: str):
    return jsonify({
        'success': False,
        'error': message
    }), 400


@navigation_bp.route('/path', methods=['POST'])
def compute_path():
    """
    Calcule un itinéraire vers une balise

    Body JSON:
    {
        "map": {...carte GuideLight...},
        "start": {"x": 0.0, "y": 0.0, "z": 0.0},
        "destinationId": "beacon-id"
    }

    Returns:
        JSON avec l'itinéraire au format d'export, 422 si aucun itinéraire
    """
    try:
        data = request.get_json(silent=True) or {}

        destination_id = data.get('destinationId')
        if not data.get('map') or not data.get('start') or destination_id is None:
            return _bad_request('Paramètres manquants: map, start, destinationId requis')

        indoor_map = IndoorMap.from_dict(data['map'])
        start = Vec3.from_dict(data['start'])

        result = PathPlanner(indoor_map).plan(start, str(destination_id))
        if not result.ok:
            return jsonify({
                'success': False,
                'error': result.error.value,
                'message': result.message
            }), 422

        return jsonify({
            'success': True,
            'path': export_path(result.path)
        }), 200

    except (GuideLightError, KeyError, TypeError, ValueError) as e:
        logger.error(f"❌ Requête d'itinéraire invalide: {e}")
        return _bad_request(str(e))
    except Exception as e:
        logger.error(f"❌ Erreur calcul d'itinéraire: {e}")
        return jsonify({
            'success': False,
            'error': str(e)
        }), 500


@navigation_bp.route('/calibration', methods=['POST'])
def evaluate_calibration():
    """
    Note une session de calibration

    Body JSON:
    {
        "measurements": [{"beaconId": "...", "confidence": 0.9, ...}],
        "userPosition": {"x": 0.0, "z": 0.0} (optionnel),
        "heading": 0.0 (optionnel)
    }
    """
    try:
        data = request.get_json(silent=True) or {}

        raw = data.get('measurements')
        if not isinstance(raw, list):
            return _bad_request('Paramètre manquant: measurements (liste) requis')

        measurements = [BeaconMeasurement.from_dict(m) for m in raw]
        position = data.get('userPosition') or {}
        user_position = (float(position.get('x', 0.0)), float(position.get('z', 0.0)))

        calibration = score_calibration(measurements, user_position, float(data.get('heading', 0.0)))
        return jsonify({
            'success': True,
            'calibration': calibration.to_dict(),
            'trusted': calibration.is_trusted
        }), 200

    except (GuideLightError, KeyError, TypeError, ValueError) as e:
        logger.error(f"❌ Mesures de calibration invalides: {e}")
        return _bad_request(str(e))
    except Exception as e:
        logger.error(f"❌ Erreur calibration: {e}")
        return jsonify({
            'success': False,
            'error': str(e)
        }), 500


@navigation_bp.route('/progress', methods=['POST'])
def compute_progress():
    """
    Progression le long d'un itinéraire exporté

    Body JSON:
    {
        "path": {...itinéraire exporté...},
        "waypointIndex": 0,
        "position": {"x": 0.0, "y": 0.0, "z": 0.0},
        "heading": 0.0
    }
    """
    try:
        data = request.get_json(silent=True) or {}

        if not data.get('path') or not data.get('position'):
            return _bad_request('Paramètres manquants: path, position requis')

        path = load_exported_path(data['path'])
        index = int(data.get('waypointIndex', 0))
        position = Vec3.from_dict(data['position'])

        tracker = ProgressTracker()
        progress = tracker.update(path, index, position, float(data.get('heading', 0.0)))

        response = {
            'success': True,
            'progress': progress.to_dict(),
            'approachAnnouncement': None,
            'arrived': False,
            'arrivalMessage': None,
            'offRoute': False
        }
        if path.waypoints:
            current = path.waypoints[progress.current_waypoint_index]
            response['approachAnnouncement'] = tracker.approach_announcement(
                path, progress.current_waypoint_index, progress.distance_to_next_waypoint
            )
            response['offRoute'] = tracker.should_recalculate(position, current)
            if tracker.has_arrived(position, current):
                response['arrived'] = True
                response['arrivalMessage'] = tracker.arrival_message(path, progress.current_waypoint_index)

        return jsonify(response), 200

    except (GuideLightError, KeyError, TypeError, ValueError) as e:
        logger.error(f"❌ Requête de progression invalide: {e}")
        return _bad_request(str(e))
    except Exception as e:
        logger.error(f"❌ Erreur progression: {e}")
        return jsonify({
            'success': False,
            'error': str(e)
        }), 500


@navigation_bp.route('/health', methods=['GET'])
def health():
    """Healthcheck"""
    return jsonify({
        'status': 'healthy',
        'service': 'guidelight-navigation'
    })
