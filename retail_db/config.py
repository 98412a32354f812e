"""
Retail DB — Configuration: paths, table/field names, query presets.
"""
import os
from pathlib import Path


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


# ---------------------------------------------------------------------------
# Paths (override with RETAIL_DB_* env vars)
# ---------------------------------------------------------------------------
BASE_FOLDER = Path(os.environ.get("RETAIL_DB_HOME", str(Path.cwd())))
DATA_FILE = Path(os.environ.get("RETAIL_DB_DATA_FILE", str(BASE_FOLDER / "retail.xlsx")))
LOG_FILE = Path(os.environ.get("RETAIL_DB_LOG_FILE", str(BASE_FOLDER / "log.txt")))
REPORTS_FOLDER = Path(os.environ.get("RETAIL_DB_REPORTS_DIR", str(BASE_FOLDER / "reports")))

SUPPORTED_EXTENSIONS = {".xlsx", ".xlsm", ".csv"}

# ---------------------------------------------------------------------------
# Tables & identifier fields
# ---------------------------------------------------------------------------
SALES_TABLE = os.environ.get("RETAIL_DB_SALES_TABLE", "Sales")
PRODUCTS_TABLE = os.environ.get("RETAIL_DB_PRODUCTS_TABLE", "Products")
ID_FIELD = os.environ.get("RETAIL_DB_ID_FIELD", "ID")

# Source never rejected duplicate identifiers on add; flip to enforce uniqueness
REJECT_DUPLICATE_IDS = _env_flag("RETAIL_DB_REJECT_DUPLICATE_IDS")

DEFAULT_TOP_N = int(os.environ.get("RETAIL_DB_TOP_N", "5"))

# Bucket / placeholder for missing group keys and unmatched join lookups
UNKNOWN_LABEL = "unknown"

# ---------------------------------------------------------------------------
# Column mapping from the raw retail workbook → internal field names
# ---------------------------------------------------------------------------
COLUMN_MAP = {
    "Идентификатор": "ID",
    "Магазин": "Store",
    "Округ": "District",
    "Адрес": "Address",
    "Артикул": "SKU",
    "Название": "Name",
    "Количество упаковок": "Packs",
    "Наличие карты покупателя": "Loyalty Card",
    "ID категории": "Category ID",
    "Категория": "Category",
    "Единица измерения": "Unit",
    "Количество в упаковке": "Pack Size",
    "Цена за упаковку": "Pack Price",
}

# ---------------------------------------------------------------------------
# Query presets (order = display order)
# ---------------------------------------------------------------------------
FEATURED_CATEGORY = os.environ.get("RETAIL_DB_FEATURED_CATEGORY", "Радиоуправляемые игрушки 12+")

QUERY_PRESETS = [
    {
        "name": "category_value",
        "kind": "filtered_total",
        "label": f"Total value of category «{FEATURED_CATEGORY}»",
        "params": {
            "table": SALES_TABLE,
            "filter_field": "Category",
            "filter_value": FEATURED_CATEGORY,
            "factor_fields": ["Packs", "Pack Price"],
        },
    },
    {
        "name": "average_pack_price",
        "kind": "parseable_average",
        "label": "Average price per pack",
        "params": {"table": SALES_TABLE, "field": "Pack Price"},
    },
    {
        "name": "items_per_store",
        "kind": "group_counts",
        "label": "Items per store",
        "params": {"table": SALES_TABLE, "group_field": "Store"},
    },
    {
        "name": "top_products",
        "kind": "top_groups",
        "label": "Top products by packs sold",
        "params": {
            "fact_table": SALES_TABLE,
            "group_field": "SKU",
            "value_field": "Packs",
            "dim_table": PRODUCTS_TABLE,
            "dim_id_field": "SKU",
            "dim_name_field": "Name",
            "n": DEFAULT_TOP_N,
        },
    },
    {
        "name": "priciest_lines",
        "kind": "ranked_rows",
        "label": "Most expensive lines",
        "params": {
            "table": SALES_TABLE,
            "rank_field": "Pack Price",
            "other_field": "Packs",
            "n": DEFAULT_TOP_N,
        },
    },
    {
        "name": "unsold_products",
        "kind": "anti_join",
        "label": "Products never sold",
        "params": {
            "dim_table": PRODUCTS_TABLE,
            "dim_id_field": "SKU",
            "fact_table": SALES_TABLE,
            "fact_fk_field": "SKU",
        },
    },
]
