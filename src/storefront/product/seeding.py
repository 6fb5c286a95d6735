"""Demo catalogue seeding."""

import json
from datetime import UTC, datetime, timedelta

import structlog
from protean.utils.globals import current_domain

from storefront.product.creation import AddProduct
from storefront.product.product import Product

logger = structlog.get_logger(__name__)

DEMO_PRODUCTS = [
    {
        "name": "SolarMax Pro 400W Panel",
        "description": "High-efficiency monocrystalline solar panel with 21% efficiency rating. "
        "Perfect for residential installations.",
        "price": 299.99,
        "category": "solar-panels",
        "stock": 50,
        "images": ["/solar-panel-installation.png"],
    },
    {
        "name": "PowerInvert 5000W Hybrid Inverter",
        "description": "Smart hybrid inverter with battery backup capability and WiFi monitoring.",
        "price": 1299.99,
        "category": "inverters",
        "stock": 25,
        "images": ["/solar-inverter.png"],
    },
    {
        "name": "EnergyStore 10kWh Lithium Battery",
        "description": "Long-lasting lithium iron phosphate battery with 6000+ cycle life.",
        "price": 2499.99,
        "category": "batteries",
        "stock": 15,
        "images": ["/solar-battery.png"],
    },
    {
        "name": "SolarMount Roof Kit",
        "description": "Complete mounting solution for tile and metal roofs. Includes all hardware.",
        "price": 199.99,
        "category": "accessories",
        "stock": 100,
        "images": ["/solar-mounting-kit.png"],
    },
    {
        "name": "EcoPanel 350W Monocrystalline",
        "description": "Cost-effective solar panel with excellent performance in low light conditions.",
        "price": 249.99,
        "category": "solar-panels",
        "stock": 75,
        "images": ["/eco-solar-panel.png"],
    },
    {
        "name": "SmartCharge MPPT Controller",
        "description": "60A MPPT charge controller with LCD display and smartphone app.",
        "price": 189.99,
        "category": "accessories",
        "stock": 40,
        "images": ["/mppt-controller.png"],
    },
]


def seed_products(products=None) -> int:
    """Add the demo catalogue if the product store is empty. Returns the number of products added."""
    products = DEMO_PRODUCTS if products is None else products

    existing = current_domain.repository_for(Product)._dao.query.limit(1).all()
    if existing.total:
        logger.info("Catalogue already seeded", existing=existing.total)
        return 0

    # Spread creation times so the listing order matches the seed order
    base = datetime.now(UTC)
    for offset, data in enumerate(products):
        current_domain.process(
            AddProduct(
                name=data["name"],
                description=data.get("description", ""),
                price=data["price"],
                category=data["category"],
                stock=data.get("stock", 0),
                images=json.dumps(data.get("images", [])),
                created_at=base - timedelta(seconds=offset),
            ),
            asynchronous=False,
        )

    logger.info("Catalogue seeded", added=len(products))
    return len(products)
