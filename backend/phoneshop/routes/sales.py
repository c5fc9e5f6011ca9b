# Overview: Flask API routes for product sales; stock moves with every create and delete.

from .resources import make_resource_blueprint
from ..services import sales_service
from ..services.resource_service import SALES

sales_bp = make_resource_blueprint(
    SALES,
    create=sales_service.create_sale,
    update=sales_service.update_sale,
    delete=sales_service.delete_sale,
)
