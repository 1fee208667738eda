"""Prompt construction for the chat completion oracle."""

from intent_bench.models.catalog import Catalog


def build_system_prompt(catalog: Catalog) -> str:
    """
    Build the deterministic system instruction.

    Lists every catalog entry as ``id: name`` in declaration order and
    restricts the answer to a bare id.
    """
    lines = [
        "You are a deterministic intent classifier.",
        "Task: read the user's text and choose the ONE service that best matches it, "
        "returning ONLY the service ID number (an integer) and nothing else.",
        "NEVER invent services, NEVER invent IDs and NEVER write names. Only the ID number.",
        "Fixed list of valid services (ID: Name):",
    ]
    lines.extend(f"{service.id}: {service.name}" for service in catalog)
    example_id = catalog.all()[0].id
    lines.extend(
        [
            "",
            "Constraints:",
            f"- Output must be ONLY the ID number (e.g.: '{example_id}').",
            "- Temperature = 0.",
        ]
    )
    return "\n".join(lines) + "\n"


def build_user_prompt(intent_text: str) -> str:
    """Wrap one intent text and repeat the bare-id constraint."""
    return f"User input: {_quote(intent_text)}\nReturn only the ID (an integer)."


def _quote(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'
