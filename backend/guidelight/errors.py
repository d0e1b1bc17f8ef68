"""
Exceptions du moteur GuideLight

Les échecs de calcul d'itinéraire ne lèvent pas d'exception (voir
PlanningResult) : ces classes ne concernent que les entrées mal formées
et les mauvais usages de la session.
"""


class GuideLightError(Exception):
    """Erreur de base GuideLight"""


class MapFormatError(GuideLightError):
    """Carte JSON invalide ou incomplète"""


class InvalidTransitionError(GuideLightError):
    """Transition interdite dans la machine d'état de navigation"""

    def __init__(self, current, target):
        self.current = current
        self.target = target
        super().__init__(f"Transition interdite: {current} → {target}")


class NavigationInactiveError(GuideLightError):
    """Mise à jour de progression demandée hors de l'état navigating"""
