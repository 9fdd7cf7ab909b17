PROMPTS = {
    "analyze_graph": """Please perform an analysis of the FalkorDB graph {graph_name}.

    Include in your analysis:
    - The schema of the graph (node labels, relationship types, property keys)
    - How many nodes exist for each label
    - How many relationships exist for each relationship type
    - A few sample nodes and relationships that illustrate the data

    Use the get_schema tool first, then execute_query with read-only Cypher queries.
    Format your analysis in a well-structured manner with clear headings and concise explanations.
    """,
    "write_cypher": """Write a Cypher query against the FalkorDB graph {graph_name} that answers:

    {question}

    Steps:
    1. Call get_schema for {graph_name} and only use labels, relationship types and property keys it returns
    2. Prefer parameters (params) over literal values inlined into the query
    3. Run the query with execute_query and check the result answers the question
    4. Return the final query together with a short explanation of the result
    """,
}
