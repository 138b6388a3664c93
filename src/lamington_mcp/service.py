"""Request handlers shared by every transport.

Each handler takes one JSON-like payload dict (camelCase keys, as sent by
clients) and returns an envelope:

    {"success": True, "<result key>": ...}
    {"success": False, "error": "..."}

Handlers never raise. Bad payloads and unknown component ids become client
errors; anything unexpected is logged and reported as a generic failure.
"""

import logging
from collections.abc import Callable
from functools import wraps
from typing import Any

from .adapters import identify_adapters
from .authenticity import calculate_authenticity_score
from .catalog import Catalog, get_catalog
from .config import MAX_QUERY_LENGTH
from .gray_market import analyze_pricing, assess_risks, predict_availability
from .models import Component, as_dict
from .negotiation import calculate_discount, generate_strategy, optimize_quantity
from .search import search_components
from .smart_parser import parse_specification
from .workarounds import find_alternatives, safety_report

logger = logging.getLogger(__name__)

# Component used for adapter lookups when the client does not name one
DEFAULT_MODERN_COMPONENT = "gpu-001"


class InvalidRequest(ValueError):
    """The payload is missing a field or names something that does not exist."""


# =============================================================================
# PAYLOAD VALIDATION
# =============================================================================

def _require_str(payload: dict[str, Any], key: str, max_length: int = MAX_QUERY_LENGTH) -> str:
    value = payload.get(key)
    if not isinstance(value, str) or not value.strip():
        raise InvalidRequest(f"'{key}' is required and must be a non-empty string")
    if len(value) > max_length:
        raise InvalidRequest(f"'{key}' too long (max {max_length} characters)")
    return value.strip()


def _optional_str(payload: dict[str, Any], key: str) -> str | None:
    value = payload.get(key)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise InvalidRequest(f"'{key}' must be a string")
    return value.strip()


def _require_positive_int(payload: dict[str, Any], key: str) -> int:
    value = payload.get(key)
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidRequest(f"'{key}' is required and must be a positive integer")
    return value


def _require_number(payload: dict[str, Any], key: str) -> float:
    value = payload.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
        raise InvalidRequest(f"'{key}' is required and must be a non-negative number")
    return float(value)


def _optional_number(payload: dict[str, Any], key: str) -> float | None:
    if payload.get(key) is None:
        return None
    return _require_number(payload, key)


def _component(catalog: Catalog, component_id: str) -> Component:
    component = catalog.get(component_id)
    if component is None:
        raise InvalidRequest(f"Component not found: {component_id}")
    return component


def _component_list(catalog: Catalog, payload: dict[str, Any], key: str) -> list[Component] | None:
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise InvalidRequest(f"'{key}' must be a list of component ids")
    return [_component(catalog, v) for v in value]


# =============================================================================
# HANDLERS
# =============================================================================

Handler = Callable[[dict[str, Any], Catalog], dict[str, Any]]


def _envelope(name: str):
    """Wrap a handler so it always returns a success or error envelope."""
    def decorator(fn: Handler) -> Callable[..., dict[str, Any]]:
        @wraps(fn)
        def wrapper(payload: dict[str, Any] | None, catalog: Catalog | None = None) -> dict[str, Any]:
            if not isinstance(payload, dict):
                return {"success": False, "error": "Request body must be a JSON object"}
            try:
                result = fn(payload, catalog if catalog is not None else get_catalog())
            except InvalidRequest as e:
                logger.info(f"Rejected {name} request: {e}")
                return {"success": False, "error": str(e)}
            except Exception:
                logger.exception(f"{name} failed")
                return {"success": False, "error": f"Internal error during {name}"}
            return {"success": True, **result}
        return wrapper
    return decorator


@_envelope("search")
def search(payload: dict[str, Any], catalog: Catalog) -> dict[str, Any]:
    query = _require_str(payload, "query")
    results = search_components(query, catalog)
    return {"results": as_dict(results), "total_results": len(results)}


@_envelope("parse")
def parse(payload: dict[str, Any], catalog: Catalog) -> dict[str, Any]:
    parsed = parse_specification(_require_str(payload, "specification"))
    return {"parsed": {**as_dict(parsed), "is_ambiguous": parsed.is_ambiguous}}


@_envelope("analyze_authenticity")
def analyze_authenticity(payload: dict[str, Any], catalog: Catalog) -> dict[str, Any]:
    component = _component(catalog, _require_str(payload, "componentId"))
    return {"analysis": as_dict(calculate_authenticity_score(component))}


@_envelope("negotiate")
def negotiate(payload: dict[str, Any], catalog: Catalog) -> dict[str, Any]:
    component = _component(catalog, _require_str(payload, "componentId"))
    quantity = _require_positive_int(payload, "quantity")
    vendor_id = _optional_str(payload, "vendorId")
    target_price = _optional_number(payload, "targetPrice")

    result = as_dict(calculate_discount(component, quantity, vendor_id))
    result["strategy"] = as_dict(generate_strategy(component, quantity, target_price))
    return {"negotiation": result}


@_envelope("optimize_quantity")
def optimize(payload: dict[str, Any], catalog: Catalog) -> dict[str, Any]:
    component = _component(catalog, _require_str(payload, "componentId"))
    budget = _require_number(payload, "budget")
    return {"optimization": as_dict(optimize_quantity(component, budget))}


@_envelope("find_adapters")
def find_adapters(payload: dict[str, Any], catalog: Catalog) -> dict[str, Any]:
    port = _require_str(payload, "legacyPort")
    component_id = _optional_str(payload, "modernComponent") or DEFAULT_MODERN_COMPONENT
    component = _component(catalog, component_id)
    return {"adapters": as_dict(identify_adapters(port, component))}


@_envelope("find_workarounds")
def find_workarounds(payload: dict[str, Any], catalog: Catalog) -> dict[str, Any]:
    target = _component(catalog, _require_str(payload, "targetComponentId"))
    inventory = _component_list(catalog, payload, "availableComponents")
    if inventory is None:
        inventory = [c for c in catalog if c.id != target.id]

    solutions = []
    for solution in find_alternatives(target, inventory):
        report = safety_report(solution)
        solutions.append({**as_dict(solution), "safety": as_dict(report), "passes_safety": report.passed})
    return {"solutions": solutions}


@_envelope("analyze_gray_market")
def analyze_gray_market(payload: dict[str, Any], catalog: Catalog) -> dict[str, Any]:
    component = _component(catalog, _require_str(payload, "componentId"))
    return {"analysis": {
        "pricing": as_dict(analyze_pricing(component)),
        "availability": as_dict(predict_availability(component)),
        "risks": as_dict(assess_risks(component)),
    }}


HANDLERS: dict[str, Callable[..., dict[str, Any]]] = {
    "search": search,
    "parse": parse,
    "analyze_authenticity": analyze_authenticity,
    "negotiate": negotiate,
    "optimize_quantity": optimize,
    "find_adapters": find_adapters,
    "find_workarounds": find_workarounds,
    "analyze_gray_market": analyze_gray_market,
}


def handle(name: str, payload: dict[str, Any] | None, catalog: Catalog | None = None) -> dict[str, Any]:
    """Dispatch a payload to the named handler."""
    handler = HANDLERS.get(name)
    if handler is None:
        return {"success": False, "error": f"Unknown operation: {name}"}
    return handler(payload, catalog)
