"""Sample catalog generation for local development and demos."""

from __future__ import annotations

import base64
import logging
import random
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from rentdesk.services.mock_store import ProductRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProductTemplate:
    name: str
    description: str
    price_range: Tuple[int, int]  # per day, INR
    models: Sequence[str]
    brands: Sequence[str]


PRODUCT_TEMPLATES: Dict[str, List[ProductTemplate]] = {
    "Electronics": [
        ProductTemplate("MacBook Pro 16\"", "High-performance laptop with M3 Pro chip, 32GB RAM and 1TB SSD.", (1200, 1800), ("M3 Pro", "M3 Max", "M2 Pro"), ("Apple",)),
        ProductTemplate("Dell XPS 15", "Premium Windows laptop with Intel i7, 16GB RAM and dedicated graphics.", (900, 1400), ("9530", "9520", "9510"), ("Dell",)),
        ProductTemplate("Canon EOS R5", "Mirrorless camera with 45MP sensor and 8K video recording.", (1500, 2200), ("R5", "R6 Mark II"), ("Canon",)),
        ProductTemplate("DJI Mavic 3", "Drone with Hasselblad camera, 5.1K video and 46-minute flight time.", (1800, 2500), ("Mavic 3", "Mavic 3 Pro"), ("DJI",)),
        ProductTemplate("4K Monitor 32\"", "4K monitor with HDR support and accurate colour.", (600, 900), ("32UP550", "M32UC"), ("LG", "Samsung", "Dell")),
    ],
    "Photography": [
        ProductTemplate("Professional Lens 85mm", "Portrait lens with f/1.4 aperture and smooth bokeh.", (700, 1000), ("85mm f/1.4", "85mm f/1.8"), ("Canon", "Sony", "Nikon")),
        ProductTemplate("Camera Tripod Carbon Fiber", "Lightweight carbon fibre tripod for photo and video.", (300, 600), ("CT-3541", "GT3543XLS"), ("Manfrotto", "Gitzo", "Peak Design")),
        ProductTemplate("Studio Lighting Kit", "Three-light studio setup with softboxes, stands and wireless triggers.", (800, 1200), ("3-Light Kit", "4-Light Kit"), ("Godox", "Profoto", "Elinchrom")),
        ProductTemplate("Camera Stabilizer Gimbal", "3-axis gimbal stabiliser for DSLR and mirrorless cameras.", (1000, 1500), ("DJI RS 3", "Zhiyun Crane 3S"), ("DJI", "Zhiyun")),
    ],
    "Sports Equipment": [
        ProductTemplate("Mountain Bike", "Full-suspension mountain bike with 29\" wheels.", (800, 1200), ("Trail", "Enduro", "XC"), ("Trek", "Specialized", "Giant")),
        ProductTemplate("Kayak Single", "Single-person recreational kayak for lakes and rivers.", (500, 800), ("Recreational", "Touring"), ("Perception", "Old Town", "Wilderness Systems")),
        ProductTemplate("Surfboard", "Performance surfboard for intermediate to advanced surfers.", (600, 900), ("Shortboard", "Longboard", "Fish"), ("Lost", "Channel Islands", "Firewire")),
        ProductTemplate("Ski Set with Boots", "Alpine ski set with skis, bindings, boots and poles.", (1000, 1500), ("All-Mountain", "Carving"), ("Rossignol", "Salomon", "Atomic")),
    ],
    "Tools & Equipment": [
        ProductTemplate("Professional Drill Set", "Cordless drill with bit set and long battery life.", (300, 600), ("18V", "20V"), ("DeWalt", "Milwaukee", "Makita")),
        ProductTemplate("Pressure Washer", "High-pressure washer for driveways, decks and vehicles.", (500, 800), ("Electric", "Gas"), ("Karcher", "Sun Joe", "Simpson")),
        ProductTemplate("Generator Portable", "Portable generator for events, camping and backup power.", (700, 1000), ("3000W", "5000W"), ("Honda", "Generac", "Champion")),
    ],
    "Home & Garden": [
        ProductTemplate("Lawn Mower Self-Propelled", "Self-propelled mower with mulching and adjustable height.", (600, 900), ("21\"", "22\""), ("Honda", "Toro", "Craftsman")),
        ProductTemplate("Chainsaw", "Chainsaw for tree cutting, pruning and firewood.", (700, 1100), ("16\"", "18\"", "20\""), ("Stihl", "Husqvarna", "Echo")),
        ProductTemplate("Patio Heater", "Propane patio heater for outdoor dining areas.", (400, 600), ("Standing", "Table Top"), ("Fire Sense", "AZ Patio", "Hiland")),
    ],
    "Party & Events": [
        ProductTemplate("Sound System PA", "PA system with wireless microphones for parties and events.", (800, 1300), ("Portable", "Fixed"), ("JBL", "Bose", "Yamaha")),
        ProductTemplate("Tent 20x20", "Event tent for outdoor parties and gatherings up to 40 people.", (1000, 1500), ("Frame Tent", "Pole Tent"), ("Eurmax", "ABCCANOPY", "King Canopy")),
        ProductTemplate("Bounce House", "Inflatable bounce house for kids parties, blower included.", (1200, 1800), ("Castle", "Slide Combo"), ("Little Tikes", "Banzai")),
    ],
    "Fitness": [
        ProductTemplate("Treadmill Commercial", "Commercial treadmill with incline and heart rate monitoring.", (1000, 1500), ("Commercial", "Home"), ("NordicTrack", "Sole", "Life Fitness")),
        ProductTemplate("Rowing Machine", "Full-body rowing machine with performance monitor.", (600, 900), ("Air Rower", "Water Rower"), ("Concept2", "WaterRower", "Hydrow")),
    ],
    "Musical Instruments": [
        ProductTemplate("Acoustic Guitar", "Solid wood acoustic guitar with a warm tone.", (400, 700), ("Dreadnought", "Concert"), ("Martin", "Taylor", "Gibson")),
        ProductTemplate("Digital Piano", "88-key digital piano with weighted keys.", (700, 1100), ("Stage Piano", "Console"), ("Yamaha", "Roland", "Kawai")),
        ProductTemplate("Drum Kit Electronic", "Electronic drum kit with mesh heads.", (1000, 1500), ("5-Piece", "7-Piece"), ("Roland", "Yamaha", "Alesis")),
    ],
    "Transportation": [
        ProductTemplate("Electric Scooter", "Folding electric scooter with long battery life.", (300, 600), ("Commuter", "Performance"), ("Xiaomi", "Segway", "Razor")),
        ProductTemplate("Electric Bike", "Pedal-assist electric bike for commuting.", (700, 1100), ("City", "Mountain"), ("Rad Power", "Trek", "Specialized")),
    ],
}

CONDITIONS = ("New", "Good", "Fair")
CONDITION_WEIGHTS = (0.3, 0.6, 0.1)
PLACEHOLDER_COLORS = ("4F46E5", "7C3AED", "DB2777", "DC2626", "EA580C", "059669", "0891B2")
STOCK_RANGE = (1, 20)


@dataclass
class SeedSummary:
    created: int
    batches: int
    by_category: Dict[str, int] = field(default_factory=dict)
    average_price: float = 0.0
    min_price: float = 0.0
    max_price: float = 0.0
    total_units: int = 0


def _svg_data_uri(svg: str) -> str:
    encoded = base64.b64encode(svg.strip().encode("utf-8")).decode("ascii")
    return f"data:image/svg+xml;base64,{encoded}"


def placeholder_images(product_name: str, category: str, rng: random.Random) -> List[str]:
    color = rng.choice(PLACEHOLDER_COLORS)
    front = (
        '<svg width="400" height="300" xmlns="http://www.w3.org/2000/svg">'
        f'<rect width="400" height="300" fill="#{color}"/>'
        '<text x="200" y="140" font-family="Arial, sans-serif" font-size="16" fill="white" '
        f'text-anchor="middle">{category}</text>'
        '<text x="200" y="170" font-family="Arial, sans-serif" font-size="12" fill="white" '
        f'text-anchor="middle">{product_name}</text>'
        "</svg>"
    )
    back = (
        '<svg width="400" height="300" xmlns="http://www.w3.org/2000/svg">'
        f'<rect width="400" height="300" fill="#{color}AA"/>'
        '<text x="200" y="150" font-family="Arial, sans-serif" font-size="14" fill="white" '
        'text-anchor="middle">Product Image 2</text>'
        "</svg>"
    )
    return [_svg_data_uri(front), _svg_data_uri(back)]


def generate_products(count: int = 100, rng: Optional[random.Random] = None) -> List[Dict[str, object]]:
    """Build ``count`` product payloads, cycling through categories, then shuffle them."""

    rng = rng or random.Random()
    products: List[Dict[str, object]] = []
    categories = list(PRODUCT_TEMPLATES)
    while len(products) < count:
        for category in categories:
            if len(products) >= count:
                break
            template = rng.choice(PRODUCT_TEMPLATES[category])
            brand = rng.choice(template.brands)
            model = rng.choice(template.models)
            stock = rng.randint(*STOCK_RANGE)
            products.append(
                {
                    "name": f"{template.name} - {brand} {model}",
                    "description": template.description,
                    "images": placeholder_images(template.name, category, rng),
                    "is_rentable": True,
                    "stock": stock,
                    "available_stock": stock,
                    "price_per_day": float(rng.randint(*template.price_range)),
                    "category": category,
                    "brand": brand,
                    "model": model,
                    "condition": rng.choices(CONDITIONS, weights=CONDITION_WEIGHTS)[0],
                }
            )
    rng.shuffle(products)
    return products


def summarize(products: Sequence[Dict[str, object]], batches: int) -> SeedSummary:
    if not products:
        return SeedSummary(created=0, batches=batches)

    prices = [float(product["price_per_day"]) for product in products]
    by_category = Counter(str(product["category"]) for product in products)
    return SeedSummary(
        created=len(products),
        batches=batches,
        by_category=dict(by_category.most_common()),
        average_price=sum(prices) / len(prices),
        min_price=min(prices),
        max_price=max(prices),
        total_units=sum(int(product["stock"]) for product in products),
    )


def batched(products: Sequence[Dict[str, object]], batch_size: int) -> List[Sequence[Dict[str, object]]]:
    if batch_size < 1:
        raise ValueError(f"batch_size must be at least 1, got {batch_size}")
    return [products[start:start + batch_size] for start in range(0, len(products), batch_size)]


def seed_catalog(
    repository: ProductRepository,
    *,
    count: int = 100,
    batch_size: int = 10,
    rng: Optional[random.Random] = None,
) -> SeedSummary:
    """Replace the catalog in ``repository`` with freshly generated products."""

    products = generate_products(count, rng)
    batches = batched(products, batch_size)

    logger.info("Clearing existing products")
    repository.clear()

    inserted = 0
    for number, batch in enumerate(batches, start=1):
        for product in batch:
            repository.insert(product)
        inserted += len(batch)
        logger.info("Inserted batch %d (%d/%d products)", number, inserted, len(products))

    return summarize(products, len(batches))
