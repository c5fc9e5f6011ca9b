# Overview: Flask API routes for repair jobs; merge-style edits and status transitions.

from .resources import make_resource_blueprint
from ..decorators import api_endpoint, json_body
from ..services import repair_service
from ..services.resource_service import REPAIRS

# PUT /repairs/<id> merges into the stored record and 404s when it is missing
repairs_bp = make_resource_blueprint(
    REPAIRS,
    create=repair_service.create_repair,
    update=repair_service.update_repair,
)


@repairs_bp.put("/<record_id>/status")
@api_endpoint("update repair status")
def update_repair_status(record_id: str):
    """Body: {"status": "in_progress" | "completed" | "delivered"}."""
    payload = json_body()
    return repair_service.update_repair_status(record_id, payload.get("status"))
