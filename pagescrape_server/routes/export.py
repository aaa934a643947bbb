"""CSV export endpoint"""

from flask import Blueprint, Response, jsonify

from pagescrape_core.data_export import export_filename, to_csv
from pagescrape_server.routes import get_session

export_bp = Blueprint('export', __name__)


@export_bp.route('/api/export', methods=['GET'])
def export():
    """Download the cached result as scraped-data-<date>.csv"""
    items = get_session().results()
    if not items:
        return jsonify({"error": "No data to export"}), 404
    return Response(
        to_csv(items),
        mimetype='text/csv',
        headers={"Content-Disposition": f'attachment; filename="{export_filename()}"'},
    )
