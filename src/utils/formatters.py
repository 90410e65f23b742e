"""
Text formatters for MCP tool responses.

Tools return plain text to the assistant. These helpers keep the layout
consistent: labelled fields with "N/A" for missing values, numbered entries
separated by "---".
"""

from typing import Any, Iterable, Mapping, Optional

NOT_AVAILABLE = "N/A"


def format_value(value: Any) -> str:
    """Render a single field value, using N/A for empty values."""
    if value is None or value == "" or value == []:
        return NOT_AVAILABLE
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value)
    return str(value)


def format_fields(fields: Mapping[str, Any]) -> str:
    """Render "Label: value" lines for an ordered mapping."""
    return "\n".join(f"{label}: {format_value(value)}" for label, value in fields.items())


def format_success_response(
    action: str, details: Mapping[str, Any], summary: Optional[str] = None
) -> str:
    """Format a single-record response.

    Args:
        action: Heading for the record, e.g. "User Profile Information".
        details: Ordered label -> value mapping.
        summary: Optional closing line.

    Returns:
        The formatted text.
    """
    text = f"{action}:\n{format_fields(details)}"
    if summary:
        text = f"{text}\n\n{summary}"
    return text


def format_list_response(
    heading: str, item_label: str, items: Iterable[Mapping[str, Any]]
) -> str:
    """Format a numbered list of records.

    Args:
        heading: First line of the response.
        item_label: Label for each entry, e.g. "Email" -> "Email 1:".
        items: Ordered label -> value mappings, one per entry.

    Returns:
        The formatted text.
    """
    entries = [
        f"{item_label} {index}:\n{format_fields(item)}\n---"
        for index, item in enumerate(items, start=1)
    ]
    return f"{heading}\n\n" + "\n\n".join(entries)


def format_error_response(error_message: str, context: str) -> str:
    """Format an error as tool output.

    Args:
        error_message: The error description.
        context: Verb phrase for the failed action, e.g. "retrieve emails".

    Returns:
        "Failed to <context>: <error_message>"
    """
    return f"Failed to {context}: {error_message}"
