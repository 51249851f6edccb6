"""Prompt templates and completion request construction."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from qa2table.exceptions import RequestBuildError

DEFAULT_MODEL = "gpt-4-1106-preview"
DEFAULT_MAX_TOKENS = 4000

DEFAULT_SYSTEM_PROMPT = (
    "As a highly skilled assistant, you are tasked with generating informative "
    "question and answer pairs from the provided text. Focus on crafting Q&A pairs "
    "that are relevant to the primary subject matter of the text. Your questions "
    "should be engaging and answers concise, avoiding details of specific examples "
    "that are not representative of the text's broader themes. Aim for a "
    "comprehensive understanding that captures the essence of the content without "
    "being sidetracked by less relevant details."
)

USER_PROMPT_TEMPLATE = """Here is the user input to work with:
---
{chunk}
---
Your task is to dissect this text for its central themes and most significant details, crafting question and answer pairs that reflect the core message and primary content. Avoid questions about specific examples that do not contribute to the overall understanding of the subject. The questions should cover different types: factual, inferential, thematic, etc., and answers must be concise and pertinent to the text's main intent. Please generate as many relevant question and answers as possible, focusing on the significance and relevance of each to the text's main topic. Provide the results in the following JSON format:
{{
    "qa_pairs": [
        {{
            "question": "<Your question>",
            "answer": "<Your answer>"
        }},
        // ... additional Q&A pairs based on text relevance
    ]
}}"""


@dataclass(frozen=True)
class CompletionRequest:
    """A single chat-completion request for one chunk."""

    system_prompt: str
    user_prompt: str
    model: str = DEFAULT_MODEL
    max_tokens: int = DEFAULT_MAX_TOKENS
    response_format: str = "json"
    n: int = 1

    def messages(self) -> List[Dict[str, str]]:
        """Role-tagged messages in the order the service expects."""
        return [
            {"role": "system", "content": self.system_prompt},
            {"role": "user", "content": self.user_prompt},
        ]


def build_request(
    chunk: str,
    system_prompt: Optional[str] = None,
    model: str = DEFAULT_MODEL,
    max_tokens: int = DEFAULT_MAX_TOKENS,
) -> CompletionRequest:
    """Build the completion request for a chunk.

    Args:
        chunk: Section of source text, embedded verbatim
        system_prompt: Override for the system instruction; empty means default
        model: Model identifier
        max_tokens: Output token budget

    Raises:
        RequestBuildError: If the chunk is not a non-blank string or the
            token budget is not positive
    """
    if not isinstance(chunk, str) or not chunk.strip():
        raise RequestBuildError("Chunk must be a non-empty string")
    if max_tokens <= 0:
        raise RequestBuildError(f"max_tokens must be positive, got {max_tokens}")

    return CompletionRequest(
        system_prompt=system_prompt or DEFAULT_SYSTEM_PROMPT,
        user_prompt=USER_PROMPT_TEMPLATE.format(chunk=chunk),
        model=model,
        max_tokens=max_tokens,
    )
