# Overview: Flask API routes for handset sales.

from .resources import make_resource_blueprint
from ..services import phone_sales_service
from ..services.resource_service import PHONE_SALES

phone_sales_bp = make_resource_blueprint(
    PHONE_SALES,
    create=phone_sales_service.create_phone_sale,
    update=phone_sales_service.update_phone_sale,
)
