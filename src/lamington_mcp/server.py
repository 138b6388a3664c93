"""Lamington Parts MCP Server - Component sourcing for a legacy electronics market."""

import logging
from contextlib import asynccontextmanager

from fastmcp import FastMCP
from mcp.types import ToolAnnotations
from starlette.responses import JSONResponse
from starlette.routing import Route

from . import __version__
from . import service
from .catalog import get_catalog
from .config import HTTP_PORT, LOG_LEVEL

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    """Load the component catalog on startup (not on first request)."""
    catalog = get_catalog()
    logger.info(f"Catalog ready: {len(catalog)} components in {len(catalog.market_sections())} sections")
    yield


mcp = FastMCP(
    name="lamington-parts",
    instructions="Component sourcing for a legacy electronics market. No auth required. Use search_components for free-text queries (part numbers, specs, categories); parse_specification shows how a query is understood. Component ids from search results feed the authenticity, negotiation, gray market, adapter and workaround tools.",
    lifespan=lifespan,
)


def _read_only(title: str) -> ToolAnnotations:
    return ToolAnnotations(
        title=title,
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    )


@mcp.tool(annotations=_read_only("Search Components"))
async def search_components(query: str) -> dict:
    """Search the market inventory with a free-text query.

    Args:
        query: Part number, specs or description (e.g., "Intel i7-12700K 3.6GHz LGA1700",
               "DDR4 16GB 3200MHz DIMM", "RTX 4070")

    Returns:
        results: Ranked matches with availability, shop location, compatibility and quality
                 scores (0-1). A result without a component asks for clarification.
        total_results: Number of results
    """
    return service.search({"query": query})


@mcp.tool(annotations=_read_only("Parse Specification"))
async def parse_specification(specification: str) -> dict:
    """Show how a free-text specification is understood.

    Args:
        specification: Free text (e.g., "Intel i7-12700K 3.6GHz LGA1700")

    Returns:
        parsed: Extracted category, part number, electrical/physical/compatibility specs,
                confidence (0-1), ambiguities and validation errors
    """
    return service.parse({"specification": specification})


@mcp.tool(annotations=_read_only("Analyze Authenticity"))
async def analyze_authenticity(component_id: str) -> dict:
    """Estimate how likely a component is genuine OEM.

    Args:
        component_id: Component id from search results (e.g., "cpu-001")

    Returns:
        analysis: Authenticity level, confidence score (0-100), weight and thermal analysis,
                  quality indicators
    """
    return service.analyze_authenticity({"componentId": component_id})


@mcp.tool(annotations=_read_only("Negotiate Bulk Price"))
async def negotiate_price(
    component_id: str,
    quantity: int,
    vendor_id: str | None = None,
    target_price: float | None = None,
) -> dict:
    """Recommended price and negotiation strategy for a bulk purchase.

    Args:
        component_id: Component id from search results
        quantity: Number of units (>= 1)
        vendor_id: Known vendor id for a relationship bonus (e.g., "vendor_001")
        target_price: Unit price you hope to pay; shapes the opening offer

    Returns:
        negotiation: Base and recommended unit price, discount breakdown (quantity tier,
                     market, vendor, season), next quantity thresholds and strategy
    """
    return service.negotiate({
        "componentId": component_id,
        "quantity": quantity,
        "vendorId": vendor_id,
        "targetPrice": target_price,
    })


@mcp.tool(annotations=_read_only("Optimize Purchase Quantity"))
async def optimize_quantity(component_id: str, budget: float) -> dict:
    """Most units a budget buys once bulk tiers are taken into account.

    Args:
        component_id: Component id from search results
        budget: Total budget in the market currency

    Returns:
        optimization: Optimal quantity, total cost, unit price, savings percentage and the
                      next tier worth stretching for
    """
    return service.optimize({"componentId": component_id, "budget": budget})


@mcp.tool(annotations=_read_only("Find Legacy Adapters"))
async def find_adapters(legacy_port: str, modern_component: str | None = None) -> dict:
    """Adapters that connect a legacy port to a modern component.

    Args:
        legacy_port: Legacy port name (e.g., "IDE", "PS/2", "VGA", "RS232")
        modern_component: Component id to connect to (default: gpu-001)

    Returns:
        adapters: Adapter solutions ranked by compatibility, each with compatibility band,
                  reliability, estimated cost and wiring diagram
    """
    return service.find_adapters({"legacyPort": legacy_port, "modernComponent": modern_component})


@mcp.tool(annotations=_read_only("Find Workarounds"))
async def find_workarounds(
    target_component_id: str,
    available_components: list[str] | None = None,
) -> dict:
    """Build a substitute for an unavailable component from parts on hand.

    Args:
        target_component_id: Component id that cannot be sourced
        available_components: Component ids on hand (default: rest of the inventory)

    Returns:
        solutions: Workaround solutions ranked by reliability and complexity, with
                   assembly instructions, safety warnings and a safety report
    """
    return service.find_workarounds({
        "targetComponentId": target_component_id,
        "availableComponents": available_components,
    })


@mcp.tool(annotations=_read_only("Analyze Gray Market"))
async def analyze_gray_market(component_id: str) -> dict:
    """Gray-market price, delivery outlook and risks for a component.

    Args:
        component_id: Component id from search results

    Returns:
        analysis: pricing (gray vs official price, trend), availability (delivery days,
                  stock level) and risks (quality, warranty, compatibility, mitigations)
    """
    return service.analyze_gray_market({"componentId": component_id})


# Health check endpoint
async def health(request):
    return JSONResponse({
        "status": "healthy",
        "service": "lamington-parts-mcp",
        "version": __version__,
    })


# Create ASGI app
def create_app():
    """Create the ASGI application."""
    # stateless_http=True: clients do not forward session cookies
    app = mcp.http_app(
        path="/mcp",
        transport="streamable-http",
        stateless_http=True,
    )

    app.routes.append(Route("/health", health))

    return app


app = create_app()


class _HealthFilterLog(logging.Filter):
    """Suppress noisy /health access logs from Docker healthchecks."""

    def filter(self, record: logging.LogRecord) -> bool:
        msg = record.getMessage()
        return "/health" not in msg


def main():
    """Run the server."""
    import uvicorn

    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger("uvicorn.access").addFilter(_HealthFilterLog())

    uvicorn.run(
        "lamington_mcp.server:app",
        host="0.0.0.0",
        port=HTTP_PORT,
        lifespan="on",
    )


if __name__ == "__main__":
    main()
