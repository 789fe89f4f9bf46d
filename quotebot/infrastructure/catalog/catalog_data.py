from __future__ import annotations

from quotebot.domain.entities.catalog_entry import CatalogEntry, CatalogKind, DimensionField, PriceType

# Built-in catalog used when CATALOG_PATH is not configured.
# Material prices are per square inch per piece; product prices are per piece.

WIDTH = DimensionField("Width", max_value=30.0)
HEIGHT = DimensionField("Height", max_value=30.0)
GUSSET = DimensionField("Gusset", max_value=10.0)
DEPTH = DimensionField("Depth", max_value=24.0)

MYLOR_BAG = "cat-mylor-bag"
LABEL = "cat-label"
FOLDING_CARTON = "cat-folding-carton"

CATEGORIES = (
    CatalogEntry(
        id=MYLOR_BAG,
        kind=CatalogKind.CATEGORY,
        name="Mylor Bag",
        aliases=("Mylor Bags", "Flexible Packaging"),
        description="Custom printed flexible pouches and bags",
        external_id=101,
        sort_order=1,
    ),
    CatalogEntry(
        id=LABEL,
        kind=CatalogKind.CATEGORY,
        name="Label",
        aliases=("Labels", "Sticker", "Stickers"),
        description="Printed product labels on rolls or sheets",
        external_id=102,
        sort_order=2,
    ),
    CatalogEntry(
        id=FOLDING_CARTON,
        kind=CatalogKind.CATEGORY,
        name="Folding Carton",
        aliases=("Folding Cartons", "Carton", "Box", "Boxes"),
        description="Paperboard retail boxes",
        external_id=103,
        sort_order=3,
    ),
)

PRODUCTS = (
    CatalogEntry(
        id="prod-flat-pouch",
        kind=CatalogKind.PRODUCT,
        name="Flat Pouch (3 side seal)",
        aliases=("Flat Pouch", "3 Side Seal Pouch"),
        parent_category_id=MYLOR_BAG,
        description="Pouch sealed on three sides, filled from the top",
        external_id=2001,
        sort_order=1,
        unit_price=0.05,
        dimension_fields=(WIDTH, HEIGHT),
    ),
    CatalogEntry(
        id="prod-stand-up-pouch",
        kind=CatalogKind.PRODUCT,
        name="Stand Up Pouch",
        aliases=("Stand-up Pouch", "Doypack"),
        parent_category_id=MYLOR_BAG,
        description="Pouch with a bottom gusset so it stands on the shelf",
        external_id=2002,
        sort_order=2,
        unit_price=0.08,
        dimension_fields=(WIDTH, HEIGHT, GUSSET),
    ),
    CatalogEntry(
        id="prod-pillow-pouch",
        kind=CatalogKind.PRODUCT,
        name="Pillow Pouch",
        aliases=("Back Seal Pouch",),
        parent_category_id=MYLOR_BAG,
        description="Center back seal pouch for snacks and sachets",
        external_id=2003,
        sort_order=3,
        unit_price=0.06,
        dimension_fields=(WIDTH, HEIGHT),
    ),
    CatalogEntry(
        id="prod-roll-label",
        kind=CatalogKind.PRODUCT,
        name="Roll Label",
        aliases=("Labels on Roll",),
        parent_category_id=LABEL,
        description="Labels delivered on a roll for machine application",
        external_id=2101,
        sort_order=1,
        unit_price=0.02,
        dimension_fields=(WIDTH, HEIGHT),
    ),
    CatalogEntry(
        id="prod-sheet-label",
        kind=CatalogKind.PRODUCT,
        name="Sheet Label",
        parent_category_id=LABEL,
        description="Labels delivered on flat sheets for hand application",
        external_id=2102,
        sort_order=2,
        unit_price=0.03,
        dimension_fields=(WIDTH, HEIGHT),
    ),
    CatalogEntry(
        id="prod-tuck-end-box",
        kind=CatalogKind.PRODUCT,
        name="Tuck End Box",
        aliases=("Reverse Tuck End Box", "RTE Box"),
        parent_category_id=FOLDING_CARTON,
        description="Folding carton with tuck flaps at both ends",
        external_id=2201,
        sort_order=1,
        unit_price=0.15,
        dimension_fields=(WIDTH, HEIGHT, DEPTH),
    ),
    CatalogEntry(
        id="prod-seal-end-box",
        kind=CatalogKind.PRODUCT,
        name="Seal End Box",
        parent_category_id=FOLDING_CARTON,
        description="Folding carton with glued ends for cereal style packs",
        external_id=2202,
        sort_order=2,
        unit_price=0.14,
        dimension_fields=(WIDTH, HEIGHT, DEPTH),
    ),
)

MATERIALS = (
    CatalogEntry(
        id="mat-pet-white-pe",
        kind=CatalogKind.MATERIAL,
        name="PET + White PE",
        parent_category_id=MYLOR_BAG,
        description="Glossy PET laminated to white PE",
        external_id=3001,
        sort_order=1,
        unit_price=0.004,
    ),
    CatalogEntry(
        id="mat-kraft-pe",
        kind=CatalogKind.MATERIAL,
        name="Kraft + PE",
        parent_category_id=MYLOR_BAG,
        description="Natural kraft paper laminated to PE",
        external_id=3002,
        sort_order=2,
        unit_price=0.005,
    ),
    CatalogEntry(
        id="mat-pet-mpet-pe",
        kind=CatalogKind.MATERIAL,
        name="PET + MPET + PE",
        parent_category_id=MYLOR_BAG,
        description="Metallized barrier film for light sensitive products",
        external_id=3003,
        sort_order=3,
        unit_price=0.006,
    ),
    CatalogEntry(
        id="mat-holographic-pe",
        kind=CatalogKind.MATERIAL,
        name="Holographic + PE",
        parent_category_id=MYLOR_BAG,
        description="Rainbow holographic film laminated to PE",
        external_id=3004,
        sort_order=4,
        unit_price=0.008,
    ),
    CatalogEntry(
        id="mat-white-bopp",
        kind=CatalogKind.MATERIAL,
        name="White BOPP",
        parent_category_id=LABEL,
        description="Waterproof white film label stock",
        external_id=3101,
        sort_order=1,
        unit_price=0.002,
    ),
    CatalogEntry(
        id="mat-clear-bopp",
        kind=CatalogKind.MATERIAL,
        name="Clear BOPP",
        parent_category_id=LABEL,
        description="Transparent no-label-look film",
        external_id=3102,
        sort_order=2,
        unit_price=0.0022,
    ),
    CatalogEntry(
        id="mat-semi-gloss-paper",
        kind=CatalogKind.MATERIAL,
        name="Semi-Gloss Paper",
        parent_category_id=LABEL,
        description="Economical coated paper label stock",
        external_id=3103,
        sort_order=3,
        unit_price=0.0015,
    ),
    CatalogEntry(
        id="mat-sbs-18pt",
        kind=CatalogKind.MATERIAL,
        name="SBS Board 18pt",
        aliases=("SBS",),
        parent_category_id=FOLDING_CARTON,
        description="Solid bleached sulfate paperboard",
        external_id=3201,
        sort_order=1,
        unit_price=0.003,
    ),
    CatalogEntry(
        id="mat-kraft-board-18pt",
        kind=CatalogKind.MATERIAL,
        name="Kraft Board 18pt",
        parent_category_id=FOLDING_CARTON,
        description="Unbleached brown paperboard",
        external_id=3202,
        sort_order=2,
        unit_price=0.0028,
    ),
)

FINISHES = (
    CatalogEntry(
        id="fin-mylor-matte",
        kind=CatalogKind.FINISH,
        name="Matte Finish",
        aliases=("Matte", "Matt"),
        parent_category_id=MYLOR_BAG,
        external_id=4001,
        sort_order=1,
        unit_price=0.01,
        price_type=PriceType.PER_UNIT,
    ),
    CatalogEntry(
        id="fin-mylor-gloss",
        kind=CatalogKind.FINISH,
        name="Gloss Finish",
        aliases=("Gloss", "Glossy"),
        parent_category_id=MYLOR_BAG,
        external_id=4002,
        sort_order=2,
        unit_price=0.008,
        price_type=PriceType.PER_UNIT,
    ),
    CatalogEntry(
        id="fin-mylor-softtouch",
        kind=CatalogKind.FINISH,
        name="Softtouch Finish",
        aliases=("Soft Touch", "Soft Touch Finish"),
        parent_category_id=MYLOR_BAG,
        external_id=4003,
        sort_order=3,
        unit_price=0.015,
        price_type=PriceType.PER_UNIT,
    ),
    CatalogEntry(
        id="fin-mylor-hot-foil",
        kind=CatalogKind.FINISH,
        name="Hot Foil",
        aliases=("Foil", "Foil Stamping"),
        parent_category_id=MYLOR_BAG,
        description="Metallic foil stamping, one-time die charge",
        external_id=4004,
        sort_order=4,
        unit_price=150.0,
        price_type=PriceType.FIXED,
    ),
    CatalogEntry(
        id="fin-mylor-spot-uv",
        kind=CatalogKind.FINISH,
        name="Spot UV",
        parent_category_id=MYLOR_BAG,
        description="Raised gloss varnish on selected areas",
        external_id=4005,
        sort_order=5,
        unit_price=10.0,
        price_type=PriceType.PERCENTAGE,
    ),
    CatalogEntry(
        id="fin-label-gloss-lamination",
        kind=CatalogKind.FINISH,
        name="Gloss Lamination",
        parent_category_id=LABEL,
        external_id=4101,
        sort_order=1,
        unit_price=0.005,
        price_type=PriceType.PER_UNIT,
    ),
    CatalogEntry(
        id="fin-label-matte-lamination",
        kind=CatalogKind.FINISH,
        name="Matte Lamination",
        parent_category_id=LABEL,
        external_id=4102,
        sort_order=2,
        unit_price=0.006,
        price_type=PriceType.PER_UNIT,
    ),
    CatalogEntry(
        id="fin-carton-matte",
        kind=CatalogKind.FINISH,
        name="Matte Finish",
        aliases=("Matte",),
        parent_category_id=FOLDING_CARTON,
        external_id=4201,
        sort_order=1,
        unit_price=0.02,
        price_type=PriceType.PER_UNIT,
    ),
    CatalogEntry(
        id="fin-carton-embossing",
        kind=CatalogKind.FINISH,
        name="Embossing",
        parent_category_id=FOLDING_CARTON,
        description="Raised logo, one-time die charge",
        external_id=4202,
        sort_order=2,
        unit_price=200.0,
        price_type=PriceType.FIXED,
    ),
)

SEED_CATALOG: tuple[CatalogEntry, ...] = CATEGORIES + PRODUCTS + MATERIALS + FINISHES
