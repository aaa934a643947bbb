"""Presets endpoint"""

from flask import Blueprint, jsonify

from pagescrape_core.presets import ATTRIBUTE_CHOICES, PRESETS

presets_bp = Blueprint('presets', __name__)


@presets_bp.route('/api/presets', methods=['GET'])
def list_presets():
    return jsonify({
        "presets": {
            name: {"selector": req.selector, "attribute": req.attribute}
            for name, req in PRESETS.items()
        },
        "attributes": list(ATTRIBUTE_CHOICES),
    })
