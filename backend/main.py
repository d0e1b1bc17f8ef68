#!/usr/bin/env python3
"""
Point d'entrée principal pour GuideLight Backend
Lance l'API de navigation depuis le module guidelight/
"""

import os
import sys

from guidelight.app import run

if __name__ == "__main__":
    try:
        port = int(os.environ.get("GUIDELIGHT_PORT", "0")) or None
        run(port=port, debug=os.environ.get("GUIDELIGHT_DEBUG") == "1")
    except ValueError as e:
        print(f"❌ Port invalide: {e}")
        sys.exit(1)
