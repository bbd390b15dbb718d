from prometheus_client import Counter

CATALOG_EXERCISES_CREATED_TOTAL = Counter(
    "catalog_exercises_created_total",
    "Number of exercises created via catalog-service",
    ["scope"],
)

CATALOG_VARIANTS_CREATED_TOTAL = Counter(
    "catalog_variants_created_total",
    "Number of exercise variants created via catalog-service",
)

CATALOG_VARIANTS_UPDATED_TOTAL = Counter(
    "catalog_variants_updated_total",
    "Number of exercise variants updated via catalog-service",
)

CATALOG_DESCRIPTIONS_CREATED_TOTAL = Counter(
    "catalog_descriptions_created_total",
    "Number of exercise descriptions created via catalog-service",
)

CATALOG_STORE_FAULTS_TOTAL = Counter(
    "catalog_store_faults_total",
    "Number of unexpected catalog store failures",
    ["operation"],
)

CATALOG_CACHE_HITS_TOTAL = Counter(
    "catalog_cache_hits_total",
    "Number of Redis cache hits in catalog-service",
)

CATALOG_CACHE_MISSES_TOTAL = Counter(
    "catalog_cache_misses_total",
    "Number of Redis cache misses in catalog-service",
)

CATALOG_CACHE_ERRORS_TOTAL = Counter(
    "catalog_cache_errors_total",
    "Number of Redis cache errors in catalog-service",
)
