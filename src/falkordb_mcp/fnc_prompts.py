"""
MCP Prompt Functions for FalkorDB

Prompt templates that walk an assistant through exploring and querying a graph.
"""

import logging

import mcp.types as types
from .prompt import PROMPTS

logger = logging.getLogger(__name__)


async def handle_list_prompts() -> list[types.Prompt]:
    logger.debug("Handling list_prompts request")
    return [
        types.Prompt(
            name="analyze_graph",
            description="Explore a FalkorDB graph: schema, label counts and sample data",
            arguments=[
                types.PromptArgument(
                    name="graphName",
                    description="Graph name to analyze",
                    required=True,
                )
            ],
        ),
        types.Prompt(
            name="write_cypher",
            description="Translate a question into a Cypher query for a FalkorDB graph",
            arguments=[
                types.PromptArgument(
                    name="graphName",
                    description="Graph name to query",
                    required=True,
                ),
                types.PromptArgument(
                    name="question",
                    description="Question the query should answer",
                    required=True,
                ),
            ],
        ),
    ]


def _messages(intro: str, prompt_text: str) -> list[types.PromptMessage]:
    return [
        types.PromptMessage(
            role="assistant",
            content=types.TextContent(type="text", text=intro),
        ),
        types.PromptMessage(
            role="user",
            content=types.TextContent(type="text", text=prompt_text),
        ),
    ]


async def handle_get_prompt(name: str, arguments: dict[str, str] | None) -> types.GetPromptResult:
    """Generate a prompt based on the requested type"""
    if arguments is None:
        arguments = {}

    graph_name = arguments.get("graphName", "graph name")

    if name == "analyze_graph":
        prompt_text = PROMPTS["analyze_graph"].format(graph_name=graph_name)
        return types.GetPromptResult(
            description=f"Analyze graph {graph_name}",
            messages=_messages(
                "I am a graph database expert specializing in FalkorDB and Cypher.",
                prompt_text,
            ),
        )

    elif name == "write_cypher":
        question = arguments.get("question", "question")
        prompt_text = PROMPTS["write_cypher"].format(graph_name=graph_name, question=question)
        return types.GetPromptResult(
            description=f"Cypher query for graph {graph_name}",
            messages=_messages(
                "I am a Cypher expert writing queries for your FalkorDB graph.",
                prompt_text,
            ),
        )

    else:
        raise ValueError(f"Unknown prompt: {name}")
