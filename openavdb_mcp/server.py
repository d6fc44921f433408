from openavdb_mcp.core.logging_config import setup_logging
from mcp.server.fastmcp import FastMCP
from importlib import import_module
import logging
import pkgutil
import sys

from openavdb_mcp import tools as tools_package
from openavdb_mcp.core.prompts import get_prompts
from openavdb_mcp.core.resources import get_resources

logger = logging.getLogger(__name__)

INSTRUCTIONS = (
    "OpenAvDB exposes US aviation data: airports, FBOs and fuel prices, the FAA aircraft registry, "
    "charter operators and brokers, flight schools, fractional providers, hangars, based fleet and "
    "flight activity. Search tools are paginated (limit max 100). Watchlist tools need a signed-in "
    "user; call get_auth_status first and start_login if needed. When a tool error includes "
    "suggestions (did_you_mean, valid_values), retry with one of them."
)


def create_server() -> FastMCP:
    """Build the FastMCP instance with every resource, tool module and prompt registered."""
    mcp = FastMCP("openavdb", instructions=INSTRUCTIONS)
    logger.info("MCP server instance created.")

    ###################################################### MCP Resources ######################################################

    logger.info("Loading MCP resources...")
    resource_count = 0
    for resource in get_resources():
        try:
            mcp.add_resource(resource)
            resource_count += 1
        except Exception:
            logger.exception(f"Failed to add resource {resource.uri}")
    logger.info(f"Total resources loaded into MCP: {resource_count}")

    ###################################################### MCP Tools ######################################################

    logger.info("Loading MCP tools...")
    loaded_tool_count = 0
    registered_tool_names: list[str] = []
    for finder, name, ispkg in pkgutil.iter_modules(tools_package.__path__):
        if name.startswith("_"):
            continue
        module_name = f"{tools_package.__name__}.{name}"
        try:
            mod = import_module(module_name)
            logger.info(f"Imported tools module: {module_name}")
        except Exception:
            logger.exception(f"Failed to load tools from module {module_name}")
            continue
        if not hasattr(mod, "get_tools"):
            continue

        # mapping: tool_name -> { 'func': callable, 'title': str, 'description': str }
        for tool_name, meta in mod.get_tools().items():
            if isinstance(meta, dict):
                func = meta.get("func")
                title = meta.get("title")
                description = meta.get("description")
            else:
                func, title, description = meta, None, None

            if not func:
                logger.warning(f"Tool {tool_name} in {module_name} did not provide a callable; skipping")
                continue

            try:
                mcp.add_tool(func, name=tool_name, title=title, description=description)
                loaded_tool_count += 1
                registered_tool_names.append(tool_name)
            except Exception:
                logger.exception(f"Failed to register tool {tool_name} from {module_name}")
    logger.info(f"Total tools registered: {loaded_tool_count} , tool names: {registered_tool_names}")

    ###################################################### MCP Prompts ######################################################

    prompt_count = 0
    for prompt in get_prompts():
        try:
            mcp.add_prompt(prompt)
            prompt_count += 1
        except Exception:
            logger.exception(f"Failed to add prompt {prompt.name}")
    logger.info(f"Total prompts registered: {prompt_count}")

    return mcp


###################################################### Startup ######################################################

def main() -> None:
    setup_logging()
    logger.info("OpenAvDB MCP server bootstrap starting.")
    mcp = create_server()
    logger.info("Starting MCP server on stdio...")
    try:
        mcp.run(transport="stdio")
        logger.info("MCP server shut down.")
    except Exception:
        logger.exception("Unhandled exception running MCP server")
        print("Unhandled exception occurred. See the server log for details.", file=sys.stderr)
        sys.exit(-1)


if __name__ == "__main__":
    main()
