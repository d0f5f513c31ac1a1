from typing import Any, Dict, List, Optional

NO_IMPACT = "N/A"
NO_DESCRIPTION = "No description available"
NO_HTML = "No HTML available"
NO_MESSAGE = "Error message not available"
NO_TARGET = "No target available"


def node_message(node: Dict[str, Any]) -> str:
    """Join the ``any`` check messages of a node, or fall back to a fixed text."""
    checks = node.get("any")
    if not isinstance(checks, list) or not checks:
        return NO_MESSAGE
    messages = []
    for check in checks:
        message = check.get("message") if isinstance(check, dict) else None
        messages.append("" if message is None else str(message))
    return ", ".join(messages)


def format_node(node: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    node = node or {}
    return {
        "html": node.get("html") or NO_HTML,
        "message": node_message(node),
        "target": node.get("target") or NO_TARGET,
    }


def format_finding(item: Dict[str, Any], page_url: str = "") -> Dict[str, Any]:
    return {
        "id": item.get("id"),
        "impact": item.get("impact") or NO_IMPACT,
        "description": item.get("description") or NO_DESCRIPTION,
        "help": item.get("help"),
        "helpUrl": item.get("helpUrl"),
        "tags": list(item.get("tags") or []),
        "pageUrl": page_url or "",
        "nodes": [format_node(node) for node in item.get("nodes") or []],
    }


def format_results(items: Optional[List[Dict[str, Any]]], page_url: str = "") -> List[Dict[str, Any]]:
    """Normalize raw axe rule results into serializable findings, preserving order."""
    return [format_finding(item, page_url) for item in items or []]


def summarize_test(item: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": item.get("id"),
        "title": item.get("help"),
        "description": item.get("description") or NO_DESCRIPTION,
        "tags": list(item.get("tags") or []),
    }
