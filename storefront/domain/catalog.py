"""Sample catalogs inserted by the backends on first start."""
from __future__ import annotations

from storefront.domain.entities import ProductDraft

_IMAGE = "https://images.unsplash.com/{}?ixlib=rb-4.0.3&auto=format&fit=crop&w=400&h=300"


def _sample(name, description, price, image, category, rating, original_price=None) -> ProductDraft:
    return ProductDraft(
        name=name,
        description=description,
        price=price,
        original_price=original_price,
        image_url=_IMAGE.format(image),
        category=category,
        rating=rating,
        in_stock=True,
    )


# The in-memory fallback keeps startup cheap with the first four items;
# database deployments get the full demo catalog.
DATABASE_CATALOG: tuple[ProductDraft, ...] = (
    _sample(
        "Wireless Headphones",
        "Premium audio experience with noise cancellation",
        "199.99",
        "photo-1505740420928-5e560c06d30e",
        "electronics",
        "4.9",
        original_price="249.99",
    ),
    _sample(
        "Smart Watch Pro",
        "Advanced fitness tracking with premium design",
        "349.99",
        "photo-1523275335684-37898b6baf30",
        "electronics",
        "4.7",
    ),
    _sample(
        "Leather Handbag",
        "Handcrafted genuine leather with premium finish",
        "159.99",
        "photo-1553062407-98eeb64c6a62",
        "fashion",
        "5.0",
    ),
    _sample(
        "Modern Desk Lamp",
        "Adjustable LED lighting for perfect workspace illumination",
        "89.99",
        "photo-1507003211169-0a1dd7228f2d",
        "home",
        "4.6",
    ),
    _sample(
        "Camera Lens 50mm",
        "Professional grade lens for stunning photography",
        "599.99",
        "photo-1606983340126-99ab4feaa64a",
        "electronics",
        "4.8",
    ),
    _sample(
        "Ceramic Vase",
        "Handcrafted ceramic with modern minimalist design",
        "39.99",
        "photo-1578662996442-48f60103fc96",
        "home",
        "4.5",
    ),
    _sample(
        "Coffee Maker Pro",
        "Professional brewing system for perfect coffee every time",
        "279.99",
        "photo-1495474472287-4d71bcdd2085",
        "home",
        "4.9",
    ),
    _sample(
        "Wireless Charger",
        "Fast wireless charging with sleek design",
        "49.99",
        "photo-1593642632559-0c6d3fc62b89",
        "electronics",
        "4.4",
    ),
)

MEMORY_CATALOG: tuple[ProductDraft, ...] = DATABASE_CATALOG[:4]
