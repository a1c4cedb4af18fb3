import json
from pathlib import Path

from casepaper.llm.exceptions import LlmError

PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(name: str, path: Path | None = None) -> str:
    """Load a prompt template.

    Args:
        name: File name of a bundled template, e.g. "normalization_prompt.txt".
        path: Explicit path that overrides the bundled file.

    Raises:
        LlmError: if the file cannot be read.
    """
    target = path if path is not None else PROMPT_DIR / name
    try:
        return target.read_text(encoding="utf-8")
    except OSError as exc:
        raise LlmError(f"Failed to load prompt template: {exc}") from exc


def load_json_schema(name: str, path: Path | None = None) -> dict[str, object]:
    """Load and parse a bundled JSON schema.

    Raises:
        LlmError: if the file cannot be read or is not a JSON object.
    """
    target = path if path is not None else PROMPT_DIR / name
    try:
        raw = target.read_text(encoding="utf-8")
    except OSError as exc:
        raise LlmError(f"Failed to load JSON schema: {exc}") from exc
    try:
        schema = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise LlmError(f"Invalid JSON schema {target.name}: {exc}") from exc
    if not isinstance(schema, dict):
        raise LlmError(f"JSON schema {target.name} must be an object")
    return schema


def parse_json_object(raw: str) -> dict[str, object]:
    """Parse a model reply that should hold one JSON object.

    Markdown code fences around the object are tolerated.

    Raises:
        LlmError: if the reply is not a JSON object.
    """
    cleaned = raw.strip()
    if cleaned.startswith("```"):
        lines = cleaned.splitlines()
        if lines and lines[0].startswith("```"):
            lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        cleaned = "\n".join(lines)

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise LlmError(f"Invalid JSON response: {exc}") from exc

    if not isinstance(parsed, dict):
        raise LlmError("JSON response must be an object")
    return parsed
