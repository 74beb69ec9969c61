from .params import (
    NamespacedValue,
    SearchParameter,
    between,
    compile_search,
    eq,
    escape_search_value,
    format_search_value,
    gt,
    gte,
    lt,
    lte,
    namespaced,
)

__all__ = [
    "NamespacedValue",
    "SearchParameter",
    "between",
    "compile_search",
    "eq",
    "escape_search_value",
    "format_search_value",
    "gt",
    "gte",
    "lt",
    "lte",
    "namespaced",
]
