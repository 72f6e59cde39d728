"""Prompt text sent to the generative service for one component."""

from __future__ import annotations

from ..domain.models import AnalysisTarget, ProjectContext

WRAPPER_FLAGS = ("router", "redux", "query")

AVATAR_IMAGE_URL = "https://ui-avatars.com/api/?name=John+Doe&background=random"
ITEM_IMAGE_URL = "https://placehold.co/600x400?text=Product+Name"

PROMPT_TEMPLATE = """\
You are a Data Mocking Expert.

PROJECT CONTEXT:
{context}

TARGET COMPONENT:
Filename: "{filename}"
Path: "{path}"
Is TypeScript: {is_typed}

TASK:
Analyze the component code and generate realistic JSON props.

STRICT GUIDELINES:
1. **Context is King:** Use the Project Context/README to infer the data domain. \
(e.g. if README says "Bookstore", generate Book titles, not "Product A").
2. **Working Images:** NEVER generate fake URLs like 'http://example.com/img.jpg'.
   - For Users/Avatars use: "{avatar_url}"
   - For Products/Items use: "{item_url}"
3. **TypeScript Compliance:** If the file is TypeScript, look for 'interface' or 'type' \
definitions. You MUST generate data that strictly matches those types \
(enums, optional fields, arrays).
4. **Wrappers:** Detect if the code needs {wrapper_list}.

Output JSON format:
{{
  "props": {{ ... }},
  "wrappers": {{ {wrapper_schema} }}
}}

COMPONENT CODE:
{content}
"""


def compose_prompt(target: AnalysisTarget, context: ProjectContext) -> str:
    """Build the instruction text for ``target``. Pure and deterministic."""
    return PROMPT_TEMPLATE.format(
        context=context.render(),
        filename=target.filename,
        path=target.path,
        is_typed=str(target.is_typed).lower(),
        avatar_url=AVATAR_IMAGE_URL,
        item_url=ITEM_IMAGE_URL,
        wrapper_list=", ".join(f"'{flag}'" for flag in WRAPPER_FLAGS[:-1])
        + f" or '{WRAPPER_FLAGS[-1]}'",
        wrapper_schema=", ".join(f'"{flag}": boolean' for flag in WRAPPER_FLAGS),
        content=target.content,
    )
